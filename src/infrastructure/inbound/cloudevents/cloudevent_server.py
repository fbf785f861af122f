import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse
import uvicorn

from src.infrastructure.inbound.cloudevents.cloudevent_decoder import CloudEventHttpDecoder
from src.observability.structured_runtime_logger import StructuredRuntimeLogger
from src.responder.domain.exceptions import CloudEventParseError
from src.responder.domain.invocation_context import InvocationContext
from src.responder.services.responder import Responder

app = FastAPI(title="Face analysis responder")

# Dependencies (installed by bootstrap once configuration is ready)
responder: Optional[Responder] = None
decoder = CloudEventHttpDecoder()
handler_logger = logging.getLogger("responder")
runtime_logger = StructuredRuntimeLogger()


def setup_dependencies(
    resp: Responder,
    handler_log: Optional[logging.Logger] = None,
    logger: Optional[StructuredRuntimeLogger] = None,
):
    global responder, handler_logger, runtime_logger
    responder = resp
    handler_logger = handler_log or logging.getLogger("responder")
    runtime_logger = logger or StructuredRuntimeLogger()


def reset_dependencies():
    global responder
    responder = None


@app.post("/")
async def receive_event(request: Request):
    if responder is None:
        raise HTTPException(status_code=503, detail="Responder not configured")

    # 1. Decode (binary or structured content mode)
    raw_body = await request.body()
    try:
        event = decoder.decode(request.headers, raw_body)
    except CloudEventParseError as e:
        runtime_logger.emit_error(event_type="EVENT_REJECTED", status="bad_request", reason=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    if event is not None:
        runtime_logger.emit(
            event_type="EVENT_RECEIVED",
            ce_type=event.type,
            ce_id=event.id,
            ce_source=event.source,
        )

    # 2. Handle; the reply itself is sent in the background
    context = InvocationContext(
        log=handler_logger,
        headers=dict(request.headers),
        method=request.method,
        query=dict(request.query_params),
    )
    ack = responder.handle(context, event)

    runtime_logger.emit(
        event_type="EVENT_HANDLED",
        status_code=ack.status_code,
        message=ack.message,
        ce_id=event.id if event else None,
    )

    # 3. Message-only acknowledgments carry no status of their own
    if ack.status_code is None:
        return JSONResponse(status_code=200, content=ack.to_dict())
    return Response(status_code=ack.status_code)


@app.get("/health/liveness")
async def liveness():
    return {"status": "ok"}


@app.get("/health/readiness")
async def readiness():
    if responder is None:
        raise HTTPException(status_code=503, detail="Responder not configured")
    return {"status": "ready"}


def run_server(host="0.0.0.0", port=8080, log_level: str = "info"):
    uvicorn.run(app, host=host, port=port, log_level=log_level)
