"""
Turn parsed references into GitLab URLs.

Resolution is plain string construction from the reference and the
configuration; nothing is looked up on the server.
"""

from typing import Optional
from urllib.parse import quote

from gitlab_link.config.models import GitlabLinkConfig
from gitlab_link.exceptions import MissingProjectContextError
from gitlab_link.processing.types import MatchSpan, ReferenceKind, ResolvedLink

# Path appended to the project URL, per reference kind
KIND_SUFFIXES = {
    ReferenceKind.PROJECT: "",
    ReferenceKind.ISSUE: "/-/issues/{number}",
    ReferenceKind.MERGE_REQUEST: "/-/merge_requests/{number}",
}


def _quote_path(path: str) -> str:
    return quote(path, safe="/-_.~")


def resolve(span: MatchSpan, config: GitlabLinkConfig) -> ResolvedLink:
    """
    Build the link for a matched reference.

    Args:
        span: The matched reference.
        config: Active configuration.

    Returns:
        The link target and its label (the verbatim matched text).

    Raises:
        MissingProjectContextError: If the reference omits its namespace or
            project and no default is configured.
    """
    token = span.token

    namespace: Optional[str] = "/".join(token.namespace) if token.namespace else config.namespace
    if not namespace:
        raise MissingProjectContextError(span.text, "namespace")

    project = token.project or config.project
    if not project:
        raise MissingProjectContextError(span.text, "project")

    suffix = KIND_SUFFIXES[token.kind].format(number=token.number)
    href = f"{config.server_url}/{_quote_path(namespace)}/{_quote_path(project)}{suffix}"
    return ResolvedLink(href=href, label=span.text)
