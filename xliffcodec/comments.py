from typing import List, Tuple


def split_comment(comment: str, use_hint: bool = False) -> Tuple[str, List[str]]:
    """
    Splits a developer comment into (resname, note lines).

    When use_hint is set the first line is taken out as the resname and the
    remaining lines become notes. Without it resname is empty and every line
    is a note. An empty comment gives no notes at all.
    """
    if not comment:
        return "", []

    lines = comment.replace("\r\n", "\n").split("\n")
    # Trailing line breaks do not produce empty notes
    while lines and lines[-1] == "":
        lines.pop()

    if not use_hint or not lines:
        return "", lines

    return lines[0], lines[1:]


def join_comment(notes: List[str], resname: str = "") -> str:
    """Rebuilds the comment from note lines, with the resname line (if any) first."""
    lines = [resname] if resname else []
    lines.extend(notes)
    return "\n".join(lines)
