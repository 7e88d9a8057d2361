"""Small text helpers used when rendering help output and name suggestions."""

from typing import Any, Iterable, List, Mapping

# max number of similar names suggested for an unknown command
MAX_SIMILAR = 5


def upper_first(s: str) -> str:
    """Upper case the first character, keep the rest unchanged."""
    if not s:
        return s
    return s[0].upper() + s[1:]


def pad_right(s: str, width: int, pad: str = " ") -> str:
    """Pad the string on the right up to ``width`` characters."""
    if len(s) >= width:
        return s
    return s + pad * (width - len(s))


def render_text(template: str, data: Mapping[str, Any]) -> str:
    """Render a ``str.format`` template with the given data.

    Literal braces in templates are written doubled, so the ``{$name}`` help
    variables appear as ``{{$name}}`` in the template source and survive
    rendering for the help replacer.
    """
    return template.format(**data)


def similar_names(input_name: str, candidates: Iterable[str], limit: int) -> List[str]:
    """Pick the candidates related to ``input_name``, at most ``limit``.

    A candidate qualifies when the longer of the two strings contains the
    shorter one, so equal-length strings never match. Candidates keep their
    given order.
    """
    similar: List[str] = []
    ln = len(input_name)
    for candidate in candidates:
        if len(similar) >= limit:
            break

        cln = len(candidate)
        if cln > ln and input_name in candidate:
            similar.append(candidate)
        elif ln > cln and candidate in input_name:
            similar.append(candidate)
    return similar
