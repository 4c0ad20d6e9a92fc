from typing import List
from flask import Flask, request
from deploy_webhook.models import Settings
from deploy_webhook.webhook import handle

def create_app(settings: Settings, accepted_services: List[str]) -> Flask:
    app = Flask(__name__)

    # Runs before routing errors are raised, so every path and method
    # (including /health and TRACE) goes through the webhook
    @app.before_request
    def webhook():
        text, status = handle(request, settings, accepted_services)
        return text, status, {"Content-Type": "text/plain; charset=utf-8"}

    return app

if __name__ == "__main__":
    from main import main
    main()
