from typing import Any, Dict
from werkzeug.datastructures import FileStorage
from werkzeug.exceptions import HTTPException
from .models import RequestInfoError

def _form_to_dict(form, files) -> Dict[str, Any]:
    out: Dict[str, Any] = dict(form.items())
    for key, value in files.items():
        if isinstance(value, FileStorage):
            # Size from the stream, without keeping the upload around
            value.stream.seek(0, 2)
            size = value.stream.tell()
            value.stream.seek(0)
            out[key] = {
                "filename": value.filename,
                "type": value.mimetype,
                "size": size,
            }
    return out

def describe_request(request) -> Dict[str, Any]:
    """
    Collect the parts of a Flask request worth logging: method, url, path,
    query params, headers, body, protocol and host.
    """
    try:
        method = request.method
        headers = {k.lower(): v for k, v in request.headers.items()}
        content_type = headers.get("content-type", "").lower()

        body: Any = None
        if method not in ("GET", "HEAD"):
            if "application/json" in content_type:
                body = request.get_json(force=True, silent=False, cache=True)
            elif "application/x-www-form-urlencoded" in content_type:
                body = dict(request.form.items())
            elif "multipart/form-data" in content_type:
                body = _form_to_dict(request.form, request.files)
            else:
                body = request.get_data(cache=True, as_text=True)

        return {
            "method": method,
            "url": request.url,
            "path": request.path,
            "queryParams": dict(request.args.items()),
            "headers": headers,
            "body": body,
            "protocol": f"{request.scheme}:",
            "host": request.host,
        }
    except (HTTPException, ValueError) as e:
        raise RequestInfoError(f"Failed to parse request: {e}")
