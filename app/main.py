import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv
from app.config import CORS_ORIGINS, LOG_LEVEL
from app.timesheet import router as timesheet_router

load_dotenv()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="ESUHSD Daily Timesheet API")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Same {success, error} shape as the submit endpoint's own failures
@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        messages.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg", ""))
    return JSONResponse(
        status_code=422,
        content={"success": False, "error": "; ".join(messages) or "Invalid request"},
    )


# Register routers
app.include_router(timesheet_router)   # /api/timesheet/*


@app.get("/health")
def health():
    return {"status": "ok"}
