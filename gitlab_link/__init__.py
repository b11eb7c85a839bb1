"""gitlab-link - an mdBook preprocessor for GitLab shorthand references."""

__version__ = "0.1.0"

from gitlab_link.config import GitlabLinkConfig, load_config
from gitlab_link.processing import Rewriter, rewrite

__all__ = ["GitlabLinkConfig", "Rewriter", "load_config", "rewrite"]
