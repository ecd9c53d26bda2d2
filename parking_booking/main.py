import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from parking_booking.config import Config
from parking_booking.database import Store
from parking_booking.errors import ParkingError, ErrorKind
from parking_booking.views.parking_view import router

logging.basicConfig(level=Config.LOG_LEVEL)
logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    ErrorKind.not_found: 404,
    ErrorKind.invalid_state: 409,
    ErrorKind.invalid_input: 400,
    ErrorKind.store_failure: 503,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # A STORE ATTACHED BEFORE STARTUP (TESTS) IS LEFT TO ITS OWNER
    owns_store = getattr(app.state, "store", None) is None
    try:
        if owns_store:
            app.state.store = Store.from_config()
        app.state.store.init_db()
        logger.info("Database Initialized Successfully")
    except Exception as e:
        logger.error(f"Failed to initialized the database {e}")
        raise
    yield

    if owns_store:
        app.state.store.close()
        app.state.store = None


async def parking_error_handler(request: Request, exc: ParkingError):
    return JSONResponse(
        status_code=ERROR_STATUS_CODES[exc.kind],
        content={"detail": exc.message, "kind": exc.kind.value},
    )


app: FastAPI = FastAPI(lifespan=lifespan)
app.include_router(router)
app.add_exception_handler(ParkingError, parking_error_handler)
