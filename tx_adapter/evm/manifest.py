"""Project manifests published as ENS text records on a project identity."""

import logging
from types import MappingProxyType
from typing import Literal, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .identity import set_identity_text
from .intents import IdentityTextIntent, Intent
from .models import PreparedTx

logger = logging.getLogger(__name__)

ENS_RECORD_KEYS: Mapping[str, str] = MappingProxyType(
    {
        "description": "description",
        "avatar": "avatar",
        "url": "url",
        "github": "com.github",
        "twitter": "com.twitter",
        "manifest": "consul.manifest",
        "status": "consul.status",
        "stage": "consul.stage",
        "founder": "consul.founder",
        "launch_date": "consul.launchDate",
        "token_address": "consul.tokenAddress",
    }
)

PROJECT_STAGES = ("applied", "screening", "incubating", "launching", "launched")

ProjectStage = Literal["applied", "screening", "incubating", "launching", "launched"]


class ProjectManifest(BaseModel):
    """Public profile of an incubated project, serialized with camelCase keys."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(min_length=1)
    description: str = ""
    founder: str
    created_at: str = Field(alias="createdAt")
    stage: ProjectStage = "applied"
    website: Optional[str] = None
    github: Optional[str] = None
    twitter: Optional[str] = None
    token_symbol: Optional[str] = Field(default=None, alias="tokenSymbol")
    token_address: Optional[str] = Field(default=None, alias="tokenAddress")


class ManifestIntent(Intent):
    name: str
    manifest: ProjectManifest
    resolver: Optional[str] = None
    chain: str = "sepolia"


def create_project_manifest(manifest: ProjectManifest) -> str:
    return manifest.model_dump_json(by_alias=True, exclude_none=True)


def parse_project_manifest(text: str) -> Optional[ProjectManifest]:
    """Read a manifest record back, or return None when it is unreadable."""

    try:
        return ProjectManifest.model_validate_json(text)
    except ValidationError:
        logger.warning("Failed to parse project manifest: %r", text[:80])
        return None


def publish_project_manifest(intent: ManifestIntent) -> Tuple[PreparedTx, ...]:
    """Text-record writes for the manifest plus its searchable fields."""

    manifest = intent.manifest
    records = [
        (ENS_RECORD_KEYS["manifest"], create_project_manifest(manifest)),
        (ENS_RECORD_KEYS["stage"], manifest.stage),
        (ENS_RECORD_KEYS["founder"], manifest.founder),
    ]
    if manifest.token_address:
        records.append((ENS_RECORD_KEYS["token_address"], manifest.token_address))

    return tuple(
        set_identity_text(
            IdentityTextIntent(
                name=intent.name,
                key=key,
                value=value,
                resolver=intent.resolver,
                chain=intent.chain,
            )
        )
        for key, value in records
    )
