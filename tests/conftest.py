# tests/conftest.py
import pytest

from ctxgate.client import LLMClient
from ctxgate.models import ModelInfo, TokenCount


class FakeClient(LLMClient):
    """In-memory client; set the *_error attributes to make calls fail."""

    def __init__(self, token_count=100, input_limit=1000, model_info_error=None, count_error=None):
        self.token_count = token_count
        self.input_limit = input_limit
        self.model_info_error = model_info_error
        self.count_error = count_error
        self.calls = []
        self.closed = False

    def count_tokens(self, text):
        self.calls.append(("count_tokens", text))
        if self.count_error is not None:
            raise self.count_error
        return TokenCount(total=self.token_count)

    def get_model_info(self):
        self.calls.append(("get_model_info",))
        if self.model_info_error is not None:
            raise self.model_info_error
        return ModelInfo(name="fake-model", input_limit=self.input_limit, output_limit=1000)

    def generate_content(self, prompt):
        raise NotImplementedError

    def get_model_name(self):
        return "fake-model"

    def close(self):
        self.closed = True


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def project(tmp_path):
    """
    A small project tree:
      src/main.go, src/util.go, src/readme.md, src/.hidden.go
      vendor/lib.go (excluded by name), .git/config (hidden dir)
      docs/guide.md, .env
    """
    src = tmp_path / "src"
    src.mkdir()
    (src / "main.go").write_text("package main\n\nfunc main() {}\n", encoding="utf-8")
    (src / "util.go").write_text("package main\n", encoding="utf-8")
    (src / "readme.md").write_text("# Readme\n", encoding="utf-8")
    (src / ".hidden.go").write_text("package hidden\n", encoding="utf-8")

    vendor = tmp_path / "vendor"
    vendor.mkdir()
    (vendor / "lib.go").write_text("package lib\n", encoding="utf-8")

    git = tmp_path / ".git"
    git.mkdir()
    (git / "config").write_text("[core]\n", encoding="utf-8")

    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "guide.md").write_text("guide\n", encoding="utf-8")

    (tmp_path / ".env").write_text("SECRET=1\n", encoding="utf-8")
    return tmp_path
