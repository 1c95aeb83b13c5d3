"""Static greeting endpoints."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from linguaflow.schemas.language import GreetingResponse

router = APIRouter(tags=["greetings"])


@router.get("/helloWorld", response_class=PlainTextResponse)
async def hello_world() -> str:
    return "Hello World!"


@router.get("/christmas", response_model=GreetingResponse)
async def christmas() -> GreetingResponse:
    return GreetingResponse(message="Merry Christmas!")
