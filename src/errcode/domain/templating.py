# src/errcode/domain/templating.py
# Copyright (c) Errcode.
# SPDX-License-Identifier: MIT
"""Printf-style message templates.

Summary:
    Render message templates such as ``"Invalid %v"`` against an ordered
    argument list.

Supported verbs:
    * ``%v`` / ``%s``: ``str(value)``.
    * ``%d``: integers (``bool`` is not an integer here).
    * ``%q``: double-quoted, escaped string form of ``str(value)``.
    * ``%f`` / ``%.Nf``: fixed-point number, six decimals by default.
    * ``%x``: lower-case hex of an integer, ``str`` or ``bytes``.
    * ``%%``: a literal percent sign.

Mismatches:
    Rendering is best-effort by default. Problems leave a visible marker in
    the output instead of failing:

        * ``%!v(MISSING)``: a verb without a matching argument.
        * ``%!(EXTRA str=foo, int=1)``: arguments left over after the last verb.
        * ``%!d(str=abc)``: a verb that cannot format its argument.
        * ``%!(NOVERB)``: a lone ``%`` at the end of the template.

    Width and flag syntax (``%5d``, ``%-10s``, ``%+d``) is not supported. The
    character after ``%`` is read as the verb, so ``%5d`` with ``3`` renders as
    ``%!5(int=3)d``. Only a ``.N`` precision is understood, and only by ``%f``.

    With ``strict=True`` the same problems raise
    :class:`~errcode.domain.exceptions.templating.TemplateArgumentError`.

Layer:
    domain
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Sequence
from typing import Any, Final

from errcode.domain.exceptions.templating import TemplateArgumentError

__all__ = ["render_template"]

_VERB_RE: Final[re.Pattern[str]] = re.compile(r"%(?:\.(?P<precision>\d+))?(?P<verb>.?)", re.DOTALL)

_DEFAULT_FLOAT_PRECISION: Final[int] = 6


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _format_str(value: Any, precision: int | None) -> str | None:
    return str(value)


def _format_int(value: Any, precision: int | None) -> str | None:
    if not _is_integer(value):
        return None
    return str(value)


def _format_quoted(value: Any, precision: int | None) -> str | None:
    return json.dumps(str(value), ensure_ascii=False)


def _format_float(value: Any, precision: int | None) -> str | None:
    if not (_is_integer(value) or isinstance(value, float)):
        return None
    digits = _DEFAULT_FLOAT_PRECISION if precision is None else precision
    return f"{float(value):.{digits}f}"


def _format_hex(value: Any, precision: int | None) -> str | None:
    if _is_integer(value):
        return format(value, "x")
    if isinstance(value, str):
        return value.encode("utf-8").hex()
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    return None


_FORMATTERS: Final[dict[str, Callable[[Any, int | None], str | None]]] = {
    "v": _format_str,
    "s": _format_str,
    "d": _format_int,
    "q": _format_quoted,
    "f": _format_float,
    "x": _format_hex,
}


def _describe(value: Any) -> str:
    return f"{type(value).__name__}={value}"


def render_template(template: str, args: Sequence[Any], *, strict: bool = False) -> str:
    """Substitute ``args`` positionally into ``template``.

    Args:
        template: Message template with printf-style verbs.
        args: Ordered values consumed by the verbs, left to right.
        strict: Raise instead of emitting mismatch markers.

    Returns:
        The rendered message.

    Raises:
        TemplateArgumentError: In strict mode, when verbs and arguments do not
            line up or a verb cannot format its argument.
    """
    values = list(args)
    problems: list[str] = []
    consumed = 0

    def _substitute(match: re.Match[str]) -> str:
        nonlocal consumed
        verb = match.group("verb")
        raw_precision = match.group("precision")
        precision = int(raw_precision) if raw_precision is not None else None

        if verb == "%":
            return "%"
        if not verb:
            problems.append("template ends with a lone '%'")
            return "%!(NOVERB)"
        if consumed >= len(values):
            problems.append(f"missing argument for %{verb}")
            return f"%!{verb}(MISSING)"

        value = values[consumed]
        consumed += 1
        formatter = _FORMATTERS.get(verb)
        rendered = formatter(value, precision) if formatter is not None else None
        if rendered is None:
            problems.append(f"%{verb} cannot format {type(value).__name__}")
            return f"%!{verb}({_describe(value)})"
        return rendered

    rendered = _VERB_RE.sub(_substitute, template)

    if consumed < len(values):
        extra = values[consumed:]
        problems.append(f"{len(extra)} extra argument(s)")
        rendered += "%!(EXTRA " + ", ".join(_describe(v) for v in extra) + ")"

    if strict and problems:
        raise TemplateArgumentError(
            f"errcode: template {template!r} does not match its arguments",
            details={"template": template, "problems": problems},
        )
    return rendered
