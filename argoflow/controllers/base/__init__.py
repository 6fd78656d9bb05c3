"""Base controller classes."""

from argoflow.controllers.base.base_controller import BaseController, WorkerResult

__all__ = ["BaseController", "WorkerResult"]
