"""Policy engine and the services built on it."""

from .decision import Decision, PolicyOptions, Reason, Subject
from .permission_service import Action, evaluate

__all__ = ["Decision", "PolicyOptions", "Reason", "Subject", "Action", "evaluate"]
