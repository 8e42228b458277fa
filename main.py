"""HTTP entry point receiving signed interaction webhooks.
Uses Functions Framework for Cloud Functions Gen2 (target interactions_handler);
`app` serves the same routes as a plain WSGI app on Cloud Run.

The platform requires a response within 3 seconds; command handlers are
bounded by HANDLER_TIMEOUT.
"""
from functions_framework import http
from flask import Request

from interaction_router.command_sync import CommandSyncClient
from interaction_router.config import Config
from interaction_router.correlation import with_correlation
from interaction_router.dispatcher import InteractionDispatcher
from interaction_router.handlers import COMMANDS, register_base_commands
from interaction_router.web import create_app, route_request
from interaction_router.observability import init_observability, traced_function
from interaction_router.registry import CommandRegistry
from interaction_router.verifier import SignatureVerifier

config = Config.from_env()
logger, tracing = init_observability(config.service_name, app=None, environment=config.environment)

# Malformed or missing public key aborts startup
verifier = SignatureVerifier(config.discord_public_key, logger=logger)
registry = register_base_commands(CommandRegistry())
dispatcher = InteractionDispatcher(
    verifier, registry, logger=logger, handler_timeout=config.handler_timeout
)

if config.auto_register_commands:
    if config.can_register_commands:
        CommandSyncClient(
            config.discord_application_id,
            config.discord_bot_token,
            api_base_url=config.discord_api_base_url,
            guild_id=config.discord_guild_id,
            logger=logger
        ).sync_commands(COMMANDS)
    else:
        logger.warning("AUTO_REGISTER_COMMANDS set but bot token or application id missing")

# WSGI app for container deployments (gunicorn main:app), traced by OpenTelemetry
app = create_app(dispatcher, config, logger=logger, tracing=tracing)

logger.info("Interaction router ready", commands=registry.keys(), path=config.interactions_path)


@http
@with_correlation(logger)
@traced_function("interactions_handler")
def interactions_handler(request: Request):
    """Main HTTP handler.

    Routes requests to the interactions endpoint or the health check.
    """
    return route_request(request, dispatcher, config)
