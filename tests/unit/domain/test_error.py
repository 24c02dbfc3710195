# tests/unit/domain/test_error.py
# Copyright (c) Errcode.
# SPDX-License-Identifier: MIT
"""Tests for the structured Error value."""

from __future__ import annotations

import copy
import pickle
from http import HTTPStatus

import pytest

from errcode.domain.error import Error
from errcode.domain.exceptions.registry import DuplicateCodeError, RegistrySealedError
from errcode.domain.exceptions.templating import TemplateArgumentError
from errcode.domain.registry import CodeRegistry


def test_construction_registers_code_and_stores_fields(registry: CodeRegistry) -> None:
    err = Error(10, HTTPStatus.NOT_FOUND, "Not Found", registry=registry)

    assert 10 in registry
    assert err.code == 10
    assert err.http_status_code == 404
    assert err.message_template == "Not Found"
    assert err.format_args == ()
    assert isinstance(err, Exception)


def test_duplicate_code_fails_at_construction(registry: CodeRegistry) -> None:
    Error(11, 500, "Internal Server Error", registry=registry)

    with pytest.raises(DuplicateCodeError):
        Error(11, 400, "Bad Request", registry=registry)


def test_construction_fails_on_sealed_registry(registry: CodeRegistry) -> None:
    registry.seal()

    with pytest.raises(RegistrySealedError):
        Error(12, 400, "Bad Request", registry=registry)


def test_message_renders_bound_args(registry: CodeRegistry) -> None:
    err = Error(13, 400, "%v", "username", registry=registry)

    assert err.message == "username"


def test_message_returns_raw_template_without_args(registry: CodeRegistry) -> None:
    err = Error(14, 400, "Invalid %v (%d)", registry=registry)

    assert err.message == "Invalid %v (%d)"
    assert err.render(strict=True) == "Invalid %v (%d)"


def test_str_is_code_dash_message(registry: CodeRegistry) -> None:
    plain = Error(15, 500, "Internal Server Error", registry=registry)
    templated = Error(16, 400, "Invalid %v", registry=registry).with_args("email")

    assert str(plain) == f"{plain.code} - {plain.message}" == "15 - Internal Server Error"
    assert str(templated) == "16 - Invalid email"


def test_with_args_does_not_mutate_receiver(registry: CodeRegistry) -> None:
    base = Error(17, 400, "Invalid %v", registry=registry)

    first = base.with_args("username")
    second = base.with_args("password")

    assert first is not base
    assert second is not first
    assert first.message == "Invalid username"
    assert second.message == "Invalid password"
    assert base.message == "Invalid %v"
    assert base.format_args == ()


def test_with_args_appends_across_layers(registry: CodeRegistry) -> None:
    base = Error(18, 409, "%v conflicts with %v", registry=registry)

    partial = base.with_args("order-1")
    full = partial.with_args("order-2")

    assert partial.format_args == ("order-1",)
    assert full.format_args == ("order-1", "order-2")
    assert full.message == "order-1 conflicts with order-2"
    assert (full.code, full.http_status_code) == (18, 409)


def test_with_args_never_registers(registry: CodeRegistry) -> None:
    base = Error(19, 400, "Invalid %v", registry=registry)
    registry.seal()

    clone = base.with_args("x")

    assert clone.code == 19
    assert len(registry) == 1


def test_render_strict_raises_on_mismatch(registry: CodeRegistry) -> None:
    err = Error(20, 400, "Invalid %v", registry=registry).with_args("a", "b")

    assert err.message == "Invalid a%!(EXTRA str=b)"
    with pytest.raises(TemplateArgumentError):
        err.render(strict=True)


def test_copy_behaves_like_with_args(registry: CodeRegistry) -> None:
    base = Error(21, 400, "Invalid %v", ["field"], registry=registry)

    shallow = copy.copy(base)
    deep = copy.deepcopy(base)

    assert shallow is not base and deep is not base
    assert shallow.format_args[0] is base.format_args[0]
    assert deep.format_args[0] is not base.format_args[0]
    assert deep.format_args == base.format_args
    assert len(registry) == 1


def test_clone_can_be_raised_without_touching_definition(registry: CodeRegistry) -> None:
    base = Error(22, 400, "Invalid %v", registry=registry)

    with pytest.raises(Error) as excinfo:
        raise base.with_args("username")

    assert excinfo.value is not base
    assert base.__traceback__ is None
    assert excinfo.value.__traceback__ is not None


def test_subclass_clones_keep_their_type(registry: CodeRegistry) -> None:
    class PaymentError(Error):
        pass

    base = PaymentError(23, 402, "Payment required for %v", registry=registry)
    clone = base.with_args("plan")

    assert type(clone) is PaymentError
    assert clone.message == "Payment required for plan"
    assert "PaymentError(code=23" in repr(clone)


def test_pickle_round_trip_does_not_register_again(registry: CodeRegistry) -> None:
    clone = Error(24, 400, "Invalid %v", registry=registry).with_args("username")

    restored = pickle.loads(pickle.dumps(clone))

    assert type(restored) is Error
    assert restored is not clone
    assert restored.code == 24
    assert restored.http_status_code == 400
    assert restored.format_args == ("username",)
    assert str(restored) == "24 - Invalid username"
    assert restored.args == clone.args
    assert len(registry) == 1


def test_with_args_copies_notes(registry: CodeRegistry) -> None:
    base = Error(25, 400, "Invalid %v", registry=registry)
    base.add_note("defined in accounts")

    clone = base.with_args("username")
    clone.add_note("request 42")

    assert base.__notes__ == ["defined in accounts"]
    assert clone.__notes__ == ["defined in accounts", "request 42"]


def test_pickled_notes_are_independent(registry: CodeRegistry) -> None:
    clone = Error(26, 400, "Invalid %v", registry=registry).with_args("username")
    clone.add_note("request 42")

    restored = pickle.loads(pickle.dumps(clone))
    restored.add_note("worker 3")

    assert clone.__notes__ == ["request 42"]
    assert restored.__notes__ == ["request 42", "worker 3"]
