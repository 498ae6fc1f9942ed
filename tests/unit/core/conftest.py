"""Shared fixtures for core unit tests"""

import pytest

from mddocx.core.parse import parse_markdown


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text.

## Heading 2

- item one
- item two

```python
print("hello")
```

---

Footer paragraph.
"""


@pytest.fixture(name="sample_tokens")
def sample_tokens_fixture():
    return parse_markdown(SAMPLE_MD)
