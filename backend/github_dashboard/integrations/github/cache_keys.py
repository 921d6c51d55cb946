"""
Resource keys for GitHub entities.

Keys identify a GitHub resource independent of the URL used to fetch it
and label outbound requests in logs.
"""

DEFAULT_PR_WINDOW_DAYS = 90


class CacheKeys:

    @staticmethod
    def repo_prs_updated(owner: str, repo: str, window_days: int = DEFAULT_PR_WINDOW_DAYS) -> str:
        return f"repo:{owner}/{repo}:prs:updated:{window_days}d"

    @staticmethod
    def pr_reviews(owner: str, repo: str, number: int) -> str:
        return f"repo:{owner}/{repo}:pr:{number}:reviews"

    @staticmethod
    def user(username: str) -> str:
        return f"user:{username}"

    @staticmethod
    def user_by_id(user_id: int) -> str:
        return f"user:id:{user_id}"

    @staticmethod
    def repo_info(owner: str, repo: str) -> str:
        return f"repo:{owner}/{repo}:info"
