API = "https://api.github.com"
REPO = "acme/widgets"
ISSUE_URL = f"{API}/repos/{REPO}/issues/7"
LABELS_URL = f"{ISSUE_URL}/labels"
COMMENTS_URL = f"{ISSUE_URL}/comments"

GITHUB_ENV = {
    "GITHUB_OWNER": "acme",
    "GITHUB_REPO": "widgets",
    "GITHUB_TOKEN": "test-token",
}
OPTIONAL_ENV = ["GITHUB_API_URL", "GITHUB_TIMEOUT_SECONDS"]


def label_payload(*names: str) -> list[dict]:
    return [{"id": i, "name": name, "color": "ededed"} for i, name in enumerate(names, start=1)]


def comment_payload(comment_id: int = 1001) -> dict:
    return {
        "id": comment_id,
        "body": "",
        "html_url": f"https://github.com/acme/widgets/issues/7#issuecomment-{comment_id}",
    }
