"""Update recommendation modules."""

from .update_rules import (
    UpdateRecommender,
    UpdateRule,
    ConfigUpdate,
    DEFAULT_UPDATE_RULES
)

__all__ = [
    'UpdateRecommender',
    'UpdateRule',
    'ConfigUpdate',
    'DEFAULT_UPDATE_RULES'
]
