import hmac
import json
import logging
from typing import List, Optional, Tuple
from .docker import pull_image, restart_service
from .models import DeployRequest, RequestInfoError, Settings
from .request_info import describe_request
from .services import compose_file

HEALTH_PATH = "/health"

def _check_auth(request, settings: Settings) -> bool:
    supplied = request.headers.get("Authorization")
    if supplied is None:
        return False
    return hmac.compare_digest(supplied.encode(), settings.auth_key.encode())

def _log_unauthorized(request) -> None:
    try:
        info = describe_request(request)
    except RequestInfoError as e:
        info = {"method": request.method, "url": request.url, "error": str(e)}
    logging.error(f"Unauthorized request (404): {json.dumps(info, indent=2, default=str)}")

def _parse_deploy_request(body) -> Optional[DeployRequest]:
    if not isinstance(body, dict):
        return None
    service = body.get("service")
    tag = body.get("tag")
    if not service or not tag:
        return None
    return DeployRequest(service=service, tag=tag)

def handle(request, settings: Settings, accepted_services: List[str]) -> Tuple[str, int]:
    """Validate a deploy request, pull the image and restart the service.

    Returns the plain-text response body and HTTP status.
    """
    if request.path == HEALTH_PATH:
        return "OK", 200

    # Unknown callers get the same answer as an unknown route
    if not _check_auth(request, settings):
        _log_unauthorized(request)
        return "Not found", 404

    raw = request.get_data(cache=True)
    if not raw:
        logging.error("Missing request body (400)")
        return "Need JSON body", 400

    try:
        body = json.loads(raw)
    except ValueError as e:
        logging.error(f"Invalid JSON body (400): {e}")
        return "Invalid JSON body", 400

    deploy = _parse_deploy_request(body)
    if deploy is None:
        logging.error(f"Missing required fields (400): {json.dumps({'body': body}, indent=2)}")
        return "Missing service or tag in body", 400

    services = ", ".join(accepted_services)
    if deploy.service not in accepted_services:
        logging.error(f"Invalid service requested (400): {deploy.service}. Accepted services: {services}")
        return f"Service must be one of {services}", 400

    tags = ", ".join(settings.accepted_tags)
    if deploy.tag not in settings.accepted_tags:
        logging.error(f"Invalid tag requested (400): {deploy.tag}. Accepted tags: {tags}")
        return (
            f"Tag must be one of {tags}. "
            "Did you forget to update the configuration and restart the webhook?"
        ), 400

    pulled = pull_image(settings.image_registry, deploy.service, deploy.tag, settings.command_timeout)
    if not pulled.ok:
        logging.error(f"Docker pull failed (500):\nError: {pulled.stderr}")
        return "Docker pull failed", 500

    compose_path = compose_file(settings.services_dir, deploy.service)
    restarted = restart_service(compose_path, deploy.service, settings.command_timeout)
    if not restarted.ok:
        logging.error(f"Docker compose restart failed (500):\nError: {restarted.stderr}")
        return "Docker compose restart failed", 500

    logging.info(f"Successfully updated {deploy.service} to {deploy.tag}")
    return "Success", 200
