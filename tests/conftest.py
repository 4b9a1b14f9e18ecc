"""Shared test fixtures for fmemo-mcp tests."""

import pytest

from fmemo_mcp.config import Settings


@pytest.fixture
def settings(tmp_path):
    """Settings rooted at a temporary directory, independent of the environment."""
    return Settings(root=tmp_path.resolve())


@pytest.fixture
def sample_memo():
    """Return a sample memo document with descriptions, code and level gaps."""
    return """# Project Notes
<desc>Working notes for the parser</desc>
Top-level overview.

## Segmenter

Walks the document line by line.

```python
def segment(text):
    return text.splitlines()
```

### Fence Handling

```rust

fn main() {}

```

Lines inside fences are never headings.

#### Deep Detail

Only reached through three levels.

## Builder
<desc>Stack based</desc>

- push
- pop

# Appendix

See also the README.
"""


@pytest.fixture
def sample_memo_dir(tmp_path):
    """Create a temporary directory with memo files."""
    (tmp_path / "index.fmemo").write_text("# Index\n<desc>Start here</desc>\nWelcome.\n\n## Topics\n\nList of topics.\n")
    (tmp_path / "readme.md").write_text("# Readme\n\nPlain markdown.\n")
    (tmp_path / "notes.txt").write_text("# Not a memo\n")

    guides = tmp_path / "guides"
    guides.mkdir()
    (guides / "setup.fmemo").write_text("# Setup\n\n### Install\n\n```bash\npip install fmemo-mcp\n```\n")

    # No memo files at any depth
    (tmp_path / "assets").mkdir()
    (tmp_path / "assets" / "logo.txt").write_text("logo")

    # Hidden directory
    hidden = tmp_path / ".cache"
    hidden.mkdir()
    (hidden / "stale.fmemo").write_text("# Stale\n")

    # Ignored via .gitignore
    (tmp_path / ".gitignore").write_text("drafts/\nscratch.md\n")
    drafts = tmp_path / "drafts"
    drafts.mkdir()
    (drafts / "wip.fmemo").write_text("# Work in progress\n")
    (tmp_path / "scratch.md").write_text("# Scratch\n")

    # Sensitive file name with an accepted extension
    (tmp_path / "id_rsa.md").write_text("# Key\n")

    return tmp_path
