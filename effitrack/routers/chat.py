from fastapi import APIRouter, Request

from effitrack.core.limiter import OPERATOR_RATE_LIMIT, limiter
from effitrack.schemas.chat import ChatRequest, ChatResponse
from effitrack.services.ai_chat import chat_reply

router = APIRouter(prefix="/chat", tags=["AI Assistant"])


@router.post("/", response_model=ChatResponse)
@limiter.limit(OPERATOR_RATE_LIMIT)
def chat(request: Request, body: ChatRequest):
    reply = chat_reply([m.model_dump() for m in body.messages])
    return ChatResponse(response=reply)
