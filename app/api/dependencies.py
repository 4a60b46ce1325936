"""
Request-scoped access to the collaborators wired in app.main.create_app.
"""

from fastapi import Request

from app.services.pipeline import WebhookPipeline
from app.services.result_buffer import ResultBuffer


def get_result_buffer(request: Request) -> ResultBuffer:
    return request.app.state.result_buffer


def get_pipeline(request: Request) -> WebhookPipeline:
    return request.app.state.pipeline
