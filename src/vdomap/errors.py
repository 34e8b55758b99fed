"""Errors raised while classifying UI tree values."""

from __future__ import annotations

from typing import Any


class UnrecognizedNodeShape(ValueError):
    """A value lies outside the closed variant set of a classifier.

    Attributes:
        value: The offending raw value.
        classifier: Which family detected it ("element", "child" or "node").
    """

    def __init__(self, value: Any, classifier: str):
        self.value = value
        self.classifier = classifier
        super().__init__(f"classify_{classifier}: unknown {classifier} shape {value!r}")
