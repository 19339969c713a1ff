# comparator/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from comparator.core.config import settings
from comparator.errors import ComparatorError, InputInvalid
from comparator.models import ChatResponse, ComparatorRequest, ErrorResponse
from comparator.services import llm_service
from comparator.services.prompt_service import normalize_device_names

# --- Logging ---
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Device Comparator starting (model: %s)", settings.GROQ_MODEL)
    yield
    logger.info("Device Comparator shutting down")

# --- FastAPI App Initialization ---
app = FastAPI(
    title="Device Comparator AI",
    description="An API that compares two devices with an LLM and answers follow-up questions about the comparison.",
    version="1.0.0",
    lifespan=lifespan,
)

# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Error Handlers ---
# Errors are returned as {"error": "..."}.
@app.exception_handler(ComparatorError)
async def comparator_error_handler(request: Request, exc: ComparatorError):
    if exc.status_code >= 500:
        logger.error("%s: %s", type(exc).__name__, exc.message)
    else:
        logger.info("Rejected request (%s): %s", type(exc).__name__, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info("Invalid request body: %s", exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body."})

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

# --- API Endpoints ---
@app.post(
    "/api/comparator",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def handle_request(request: ComparatorRequest):
    """
    Single entry point for both actions.

    - `compare`: needs device1Name and device2Name, returns the comparison.
    - `chat`: needs chatContext (a comparison) and chatHistory ending with
      the user's question, returns {"response": "..."}.
    """
    if request.action == "compare":
        name_a, name_b = normalize_device_names(request.device1Name, request.device2Name)
        return await llm_service.get_comparison(name_a, name_b)

    if request.action == "chat":
        if request.chatContext is None or request.chatHistory is None:
            raise InputInvalid("Chat context and history are required.")
        answer = await llm_service.get_follow_up(request.chatContext, request.chatHistory)
        return ChatResponse(response=answer)

    raise InputInvalid("Invalid action specified.")

# A simple root endpoint to confirm the API is running
@app.get("/")
def read_root():
    return {"message": "Welcome to the Device Comparator AI API"}
