"""
Candidate Fit & Context Engine - HTTP API
"""

from typing import List, Optional

import uvicorn
from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from agents.orchestrator import Orchestrator
from utils.errors import InputError, PersistenceError

app = FastAPI(title="Candidate Fit API", description="Honest fit analysis and candidate chat")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)

_orchestrator: Optional[Orchestrator] = None


def get_orchestrator() -> Orchestrator:
    """Build the orchestrator once; strategy selection happens here"""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = Orchestrator.from_config()
    return _orchestrator


# Request/response models
class AnalyzeRequest(BaseModel):
    job_description: str = ""


class AnalyzeResponse(BaseModel):
    match_score: int
    recommendation: str
    strengths: List[str]
    gaps: List[str]
    summary: str


class ChatRequest(BaseModel):
    session_id: str = ""
    message: str = ""


class ChatResponse(BaseModel):
    message: str
    session_id: str
    created_at: str


class ChatTurn(BaseModel):
    role: str
    content: str
    created_at: str


class ChatSessionResponse(BaseModel):
    session_id: str
    messages: List[ChatTurn]


# Endpoints are plain `def` so FastAPI runs them on its threadpool;
# a slow model call in one session does not block the others.

@app.post("/api/analyze-jd", response_model=AnalyzeResponse)
def analyze_jd(request: AnalyzeRequest, orchestrator: Orchestrator = Depends(get_orchestrator)):
    try:
        result = orchestrator.analyze_fit(request.job_description)
    except InputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=f"Knowledge store unavailable: {e}")
    return AnalyzeResponse(**result.to_response())


@app.post("/api/chat", response_model=ChatResponse)
def chat(request: ChatRequest, orchestrator: Orchestrator = Depends(get_orchestrator)):
    try:
        reply = orchestrator.send_message(request.session_id, request.message)
    except InputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=f"Knowledge store unavailable: {e}")
    return ChatResponse(
        message=reply.content,
        session_id=reply.session_id,
        created_at=reply.created_at.isoformat()
    )


@app.get("/api/chat-session/{session_id}", response_model=ChatSessionResponse)
def get_chat_session(session_id: str, orchestrator: Orchestrator = Depends(get_orchestrator)):
    messages = orchestrator.session_messages(session_id)
    return ChatSessionResponse(
        session_id=session_id,
        messages=[
            ChatTurn(role=m.role, content=m.content, created_at=m.created_at.isoformat())
            for m in messages
        ]
    )


@app.delete("/api/chat-session/{session_id}")
def clear_chat_session(session_id: str, orchestrator: Orchestrator = Depends(get_orchestrator)):
    orchestrator.clear_session(session_id)
    return {"message": "Chat session cleared"}


@app.get("/api/health")
def health(orchestrator: Orchestrator = Depends(get_orchestrator)):
    return {"status": "ok", **orchestrator.status()}


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
