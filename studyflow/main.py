import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from studyflow.api import progress, sessions, statistics
from studyflow.core import config
from studyflow.core.database import Base, engine
from studyflow.core.errors import Conflict, InvalidArgument, InvalidState, NotFound, StudyError

# Register every table on Base before create_all
from studyflow.models import progress as _progress  # noqa: F401
from studyflow.models import session as _session  # noqa: F401
from studyflow.models import streak as _streak  # noqa: F401
from studyflow.models import topic as _topic  # noqa: F401

logging.basicConfig(
    level=config.LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

ERROR_STATUS = {
    NotFound: 404,
    InvalidArgument: 400,
    InvalidState: 409,
    Conflict: 409,
}

Base.metadata.create_all(bind=engine)
app = FastAPI(title="Studyflow API")

app.include_router(progress.router, prefix="/api")
app.include_router(sessions.router, prefix="/api")
app.include_router(statistics.router, prefix="/api")


@app.exception_handler(StudyError)
async def study_error_handler(request: Request, exc: StudyError):
    status = ERROR_STATUS.get(type(exc), 400)
    return JSONResponse(
        status_code=status, content={"detail": str(exc), "error": type(exc).__name__}
    )


@app.get("/")
def root():
    return {"message": "Studyflow scheduling engine"}


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
