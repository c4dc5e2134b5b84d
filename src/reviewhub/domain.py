"""ReviewHub bounded context: categorized reviews, helpful votes and author stats.

Handles the review lifecycle (create, update, delete, drafts), helpful-vote
casting with recomputed counters, category review counts, and user profile
sync from the identity provider. Read-side listings and statistics are
computed on demand in ``reviewhub.queries``.
"""

from protean.domain import Domain

from reviewhub.utils.logging import configure_logging, get_logger

configure_logging(log_dir="logs", log_file_prefix="reviewhub")

logger = get_logger(__name__)

reviewhub = Domain(name="reviewhub")
