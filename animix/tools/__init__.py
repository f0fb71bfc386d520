"""MCP tools for animix."""

import logging
from typing import Any, Callable, Dict

from pydantic import BaseModel

from ..core.errors import CatalogError, NotFoundError, UpstreamError, ValidationError
from ..core.http_client import SCHEMA, err_payload

logger = logging.getLogger(__name__)


def payload(result: Any) -> Dict[str, Any]:
    """Serialize a record (or list of records) into a tool response."""
    if isinstance(result, BaseModel):
        return {"schemaVersion": SCHEMA, **result.model_dump(by_alias=True, mode="json")}
    if isinstance(result, list):
        return {"schemaVersion": SCHEMA, "results": [
            r.model_dump(by_alias=True, mode="json") if isinstance(r, BaseModel) else r for r in result
        ]}
    return {"schemaVersion": SCHEMA, "result": result}


def respond(source: str, call: Callable[[], Any]) -> Dict[str, Any]:
    """Run a service call and map catalog errors onto error payloads."""
    try:
        return payload(call())
    except ValidationError as e:
        return err_payload(e.source if e.source != "animix" else source, "BAD_REQUEST", e.message)
    except NotFoundError as e:
        return err_payload(e.source, "NOT_FOUND", e.message)
    except UpstreamError as e:
        code = f"UPSTREAM_{e.status_code}" if e.status_code else "UPSTREAM"
        return err_payload(e.source, code, e.message)
    except CatalogError as e:
        return err_payload(e.source, "UNEXPECTED", e.message)
    except Exception as e:
        logger.warning("%s tool failed unexpectedly: %r", source, e)
        return err_payload(source, "UNEXPECTED", str(e))
