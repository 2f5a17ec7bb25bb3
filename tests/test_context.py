"""Tests for core.context."""

from __future__ import annotations

import dataclasses

import pytest

from core.context import BotContext, BotIdentity
from core.exceptions import BotError, IdentityAlreadyBoundError


def test_identity_mention(identity):
    assert identity.mention == "@examplebot"


def test_identity_is_immutable(identity):
    with pytest.raises(dataclasses.FrozenInstanceError):
        identity.username = "otherbot"


def test_identity_unavailable_before_binding(bot_context):
    assert not bot_context.is_connected
    with pytest.raises(BotError):
        bot_context.identity


def test_identity_is_write_once(bot_context, identity):
    bot_context.bind_identity(identity)

    with pytest.raises(IdentityAlreadyBoundError):
        bot_context.bind_identity(BotIdentity(id=1, username="otherbot"))

    assert bot_context.identity is identity
    assert bot_context.is_connected


def test_storage_binding():
    context = BotContext()
    assert context.storage is None
    storage = object()
    context.bind_storage(storage)
    assert context.storage is storage
