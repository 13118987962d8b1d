import hashlib
import os
import sys
import tempfile
from pathlib import Path
from urllib.parse import unquote

import pytest

# Keep log files out of the working tree; must happen before config is imported
os.environ.setdefault("REPORT_CARD_LOG_DIR", tempfile.mkdtemp(prefix="report_card_logs_"))

# Make the flat project modules importable without installation
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if PROJECT_ROOT.as_posix() not in sys.path:
    sys.path.insert(0, PROJECT_ROOT.as_posix())

import config
from core.models import PublicationTarget, ReportCard
from core.renderer import FontCandidate, ReportCardRenderer


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text or (str(payload) if payload is not None else "")

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


class FakeGitHub:
    """In-memory GitHub repository speaking the refs and contents endpoints.

    Mirrors the real API's create-or-update rules: writing over an existing
    file needs its current blob sha (422 when missing, 409 when stale).
    """

    def __init__(self, owner="octo", repo="reports", branches=("main",)):
        self.headers = {}
        self.owner = owner
        self.repo = repo
        self.branches = {name: self._sha(f"root-{name}") for name in branches}
        self.files = {}
        self.requests = []
        self.forced_status = None
        self.raise_on_request = None
        self._writes = 0

    @staticmethod
    def _sha(seed):
        return hashlib.sha1(seed.encode("utf-8")).hexdigest()

    def add_file(self, branch, path, content="ZXhpc3Rpbmc="):
        sha = self._sha(f"{branch}:{path}:{content}:seed")
        self.files[(branch, path)] = {"sha": sha, "content": content}
        return sha

    def request(self, method, url, timeout=None, params=None, json=None):
        self.requests.append({"method": method, "url": url, "timeout": timeout, "params": params, "json": json})
        if self.raise_on_request is not None:
            raise self.raise_on_request
        if self.forced_status is not None:
            return FakeResponse(self.forced_status, {"message": "forced"})

        path = unquote(url.split("://", 1)[-1].split("/", 1)[1])
        prefix = f"repos/{self.owner}/{self.repo}/"
        if not path.startswith(prefix):
            return FakeResponse(404, {"message": "Not Found"})
        rest = path[len(prefix):]

        if rest.startswith("git/ref/heads/") and method == "GET":
            branch = rest[len("git/ref/heads/"):]
            if branch not in self.branches:
                return FakeResponse(404, {"message": "Not Found"})
            return FakeResponse(200, {"ref": f"refs/heads/{branch}", "object": {"sha": self.branches[branch], "type": "commit"}})

        if rest.startswith("contents/"):
            file_path = rest[len("contents/"):]
            if method == "GET":
                entry = self.files.get(((params or {}).get("ref"), file_path))
                if entry is None:
                    return FakeResponse(404, {"message": "Not Found"})
                return FakeResponse(200, {"type": "file", "path": file_path, "sha": entry["sha"]})
            if method == "PUT":
                return self._put(file_path, json or {})

        return FakeResponse(404, {"message": "Not Found"})

    def _put(self, file_path, body):
        branch = body.get("branch")
        if branch not in self.branches:
            return FakeResponse(404, {"message": f"Branch {branch} not found"})
        existing = self.files.get((branch, file_path))
        supplied = body.get("sha")
        if existing is not None and not supplied:
            return FakeResponse(422, {"message": "Invalid request.\n\n\"sha\" wasn't supplied."})
        if existing is not None and supplied != existing["sha"]:
            return FakeResponse(409, {"message": f"{file_path} does not match {supplied}"})

        self._writes += 1
        blob_sha = self._sha(f"blob:{file_path}:{body['content']}:{self._writes}")
        commit_sha = self._sha(f"commit:{self.branches[branch]}:{self._writes}")
        self.files[(branch, file_path)] = {"sha": blob_sha, "content": body["content"], "message": body["message"]}
        self.branches[branch] = commit_sha
        status = 200 if existing is not None else 201
        return FakeResponse(status, {
            "content": {"path": file_path, "sha": blob_sha},
            "commit": {"sha": commit_sha, "message": body["message"]},
        })


class FakeJSONSession:
    """Stand-in for the grade query session: returns or raises a preset outcome."""

    def __init__(self, response=None, error=None):
        self.headers = {}
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest.fixture
def github_service(fake_github):
    from services.github_api import GitHubService
    return GitHubService("test-token", session=fake_github)


@pytest.fixture
def target():
    return PublicationTarget(owner="octo", repository="reports", path_prefix="pdfs/", branch="main")


@pytest.fixture
def vera_font_dirs():
    """reportlab ships the Bitstream Vera fonts, so tests never depend on system fonts."""
    return [config.REPORTLAB_FONT_DIR]


@pytest.fixture
def renderer(vera_font_dirs):
    return ReportCardRenderer(
        font_candidates=[FontCandidate("Vera", "Vera.ttf", "VeraBd.ttf")],
        font_dirs=vera_font_dirs,
    )


@pytest.fixture
def asha_report():
    return ReportCard(name="Asha Rao", total_marks=450, num_subjects=5, average=90.0, grade="A")
