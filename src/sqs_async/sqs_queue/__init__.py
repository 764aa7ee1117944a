"""
Package: sqs_queue
Description: Query API client, asynchronous dispatcher and failure classifier.

Provides the SQSClient operation surface and the machinery that signs,
sends and routes each request to exactly one continuation.
"""

from .classifier import ErrorClassifier
from .client import SQSClient
from .dispatcher import Dispatcher

__all__ = ["Dispatcher", "ErrorClassifier", "SQSClient"]
