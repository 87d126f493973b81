"""HTTP exposure of the tool-calling adapter."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from backend.controllers.dependencies import get_tool_service
from backend.controllers.schemas import ToolCallRequest
from backend.services.tool_service import BookingToolService


router = APIRouter(prefix="/tools", tags=["tools"])


@router.get("")
async def list_tools(
    tool_service: BookingToolService = Depends(get_tool_service),
) -> dict[str, list[dict[str, Any]]]:
    return {"tools": [tool.to_dict() for tool in tool_service.list_tools()]}


@router.post("/call")
async def call_tool(
    payload: ToolCallRequest,
    tool_service: BookingToolService = Depends(get_tool_service),
) -> dict[str, Any]:
    return tool_service.call_tool(payload.name, payload.arguments).to_dict()
