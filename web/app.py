"""Local-first FastAPI shell for the project incubator."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from agent_tools import TOOL_DESCRIPTIONS, TOOL_KINDS, invoke, list_tools, serialize_result, tool_group
from incubation_engine import (
    ConfigValidationError,
    IncubationEngine,
    IncubatorSettings,
    LedgerError,
    SessionNotFoundError,
    UnimplementedActionError,
    next_action,
)
from token_math.amounts import InvalidAmount
from tx_adapter.evm import BuildError

app = FastAPI(title="Project Incubator", description="Local-first incubation shell")

_ENGINE = IncubationEngine(settings=IncubatorSettings.from_env())


class SessionRequest(BaseModel):
    founder: str
    project_name: Optional[str] = None
    message: Optional[str] = None


class MessageRequest(BaseModel):
    text: str


class PipelineRequest(BaseModel):
    completed: List[str] = []


class SubmittedRequest(BaseModel):
    tx_hash: str


class ConfirmRequest(BaseModel):
    tx_hash: Optional[str] = None
    result: Optional[str] = None


class FailRequest(BaseModel):
    error: str


@app.middleware("http")
async def _local_only(request: Request, call_next):
    client = request.client
    if client is not None:
        host = client.host
        if host not in {"127.0.0.1", "::1", "testclient"}:
            return JSONResponse({"error": "Remote access disabled."}, status_code=403)
    return await call_next(request)


async def _handle_errors(request: Request, exc: Exception):
    return JSONResponse({"error": str(exc)}, status_code=400)


async def _handle_missing_session(request: Request, exc: Exception):
    return JSONResponse({"error": str(exc)}, status_code=404)


for _exc_class in (
    BuildError,
    ConfigValidationError,
    InvalidAmount,
    LedgerError,
    UnimplementedActionError,
    ValueError,
):
    app.add_exception_handler(_exc_class, _handle_errors)
app.add_exception_handler(SessionNotFoundError, _handle_missing_session)


@app.get("/health")
async def health():
    return {"status": "ok", "chain": _ENGINE.settings.chain}


@app.get("/api/tools")
async def tools():
    return {
        "tools": [
            {
                "name": name,
                "group": tool_group(name),
                "kind": TOOL_KINDS[name],
                "description": description,
            }
            for name, description in list_tools()
        ]
    }


@app.post("/api/tools/{name}")
async def invoke_tool(name: str, payload: Dict[str, Any]):
    if name not in TOOL_DESCRIPTIONS:
        raise HTTPException(status_code=404, detail=f"Unknown tool: {name}")
    result = invoke(name, payload)
    kind = TOOL_KINDS[name]
    if kind == "write":
        transactions = result if isinstance(result, tuple) else (result,)
        return {"kind": kind, "transactions": serialize_result(transactions)}
    return {"kind": kind, "result": serialize_result(result)}


@app.post("/api/pipeline/next")
async def pipeline_next(payload: PipelineRequest):
    upcoming = next_action(payload.completed)
    return {"next_action": upcoming.value if upcoming else None}


@app.post("/api/sessions")
async def create_session(payload: SessionRequest):
    if payload.project_name:
        session = _ENGINE.create_session(payload.project_name, payload.founder)
        response = _ENGINE.greeting(session.session_id)
    else:
        session, response = _ENGINE.start_session(payload.message or "", payload.founder)
    return {"session": session.to_dict(), "response": response.to_dict()}


@app.get("/api/sessions/{session_id}")
async def get_session(session_id: str):
    return _ENGINE.get_session(session_id).to_dict()


@app.post("/api/sessions/{session_id}/messages")
async def send_message(session_id: str, payload: MessageRequest):
    response = _ENGINE.handle_message(session_id, payload.text)
    return {
        "response": response.to_dict(),
        "session": _ENGINE.get_session(session_id).to_dict(),
    }


@app.post("/api/sessions/{session_id}/actions/{action_id}/submitted")
async def action_submitted(session_id: str, action_id: str, payload: SubmittedRequest):
    action = _ENGINE.mark_submitted(session_id, action_id, payload.tx_hash)
    return _action_payload(session_id, action)


@app.post("/api/sessions/{session_id}/actions/{action_id}/confirm")
async def action_confirm(session_id: str, action_id: str, payload: ConfirmRequest):
    action = _ENGINE.confirm_action(
        session_id, action_id, tx_hash=payload.tx_hash, result=payload.result
    )
    return _action_payload(session_id, action)


@app.post("/api/sessions/{session_id}/actions/{action_id}/fail")
async def action_fail(session_id: str, action_id: str, payload: FailRequest):
    if not payload.error.strip():
        raise HTTPException(status_code=400, detail="Failure reason required.")
    action = _ENGINE.fail_action(session_id, action_id, payload.error)
    return _action_payload(session_id, action)


@app.post("/api/sessions/{session_id}/reset")
async def reset_session(session_id: str):
    cancelled = _ENGINE.reset(session_id)
    return {
        "cancelled": [action.to_dict() for action in cancelled],
        "session": _ENGINE.get_session(session_id).to_dict(),
    }


def _action_payload(session_id: str, action) -> dict:
    return {"action": action.to_dict(), "session": _ENGINE.get_session(session_id).to_dict()}


def _reset_state(settings: Optional[IncubatorSettings] = None) -> None:
    global _ENGINE
    _ENGINE = IncubationEngine(settings=settings or IncubatorSettings.from_env())
