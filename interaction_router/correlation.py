"""Request correlation and logging for Functions Framework / Flask handlers."""
import time
from functools import wraps
from typing import Callable

from flask import request as flask_request

from .observability import get_correlation_id


def with_correlation(logger):
    """Decorator to handle correlation ID and request logging for Flask.

    Usage:
        @with_correlation(logger)
        def my_handler(request: Request):
            # correlation_id is available via request.correlation_id
            ...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            req = flask_request
            correlation_id = get_correlation_id(req)
            req.correlation_id = correlation_id
            start_time = time.time()

            forwarded_for = req.headers.get('X-Forwarded-For')
            logger.info(
                "Request started",
                correlation_id=correlation_id,
                method=req.method,
                path=req.path,
                user_agent=req.headers.get('User-Agent', ''),
                remote_addr=forwarded_for.split(',')[0].strip() if forwarded_for else ''
            )

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    "Request failed",
                    error=e,
                    correlation_id=correlation_id,
                    method=req.method,
                    path=req.path,
                    duration_ms=round((time.time() - start_time) * 1000, 2)
                )
                raise

            if isinstance(result, tuple):
                response_data = result[0]
                status_code = result[1] if len(result) > 1 else 200
                headers = result[2] if len(result) > 2 and isinstance(result[2], dict) else {}
            else:
                response_data, status_code, headers = result, 200, {}
            headers['X-Correlation-ID'] = correlation_id

            logger.info(
                "Request completed",
                correlation_id=correlation_id,
                method=req.method,
                path=req.path,
                status_code=status_code,
                duration_ms=round((time.time() - start_time) * 1000, 2)
            )

            return response_data, status_code, headers

        return wrapper
    return decorator
