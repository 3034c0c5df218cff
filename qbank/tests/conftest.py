"""Pytest configuration for qbank tests."""

import logging
import sys
from pathlib import Path

import pytest

# Add repository root to path for imports
repo_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(repo_root))

from qbank.pipeline.tokenizer import Tokenizer  # noqa: E402


OOP_NOTES = """# Object-Oriented Programming

Study notes for OOP interviews.

## Question 1: Explain the 4 OOP Pillars

> "Can you explain the pillars of object-oriented programming?"

**Detailed Answer:**

Encapsulation hides internal state behind methods.
Inheritance lets a class reuse behaviour from a base class.

## Question 2: Composition

> "When would you prefer composition over inheritance?"

**Detailed Answer:** Composition keeps coupling low and avoids fragile base classes.

### Example

```csharp
#region Engine
public class Car { private readonly Engine _engine; }
#endregion
```
"""

SOLID_NOTES = """# SOLID Principles

## Liskov Substitution

> "What does Liskov substitution guarantee?"

**Detailed Answer:**
Subtypes must be usable wherever the base type is expected.

## Dependency Inversion

High level modules depend on abstractions.

> "How does dependency injection help testing?"

**Detailed Answer:**
Tests can pass a fake repository through the constructor.
"""

DEVOPS_NOTES = """Intro text before any heading.

# DevOps

## Docker

Containers package an application with its dependencies.

## Kubernetes

Kubernetes schedules containers across a cluster.
"""


@pytest.fixture
def corpus_dir(tmp_path):
    """Directory with three markdown files and one ignored text file."""
    root = tmp_path / "notes"
    (root / "design").mkdir(parents=True)
    (root / "oop.md").write_text(OOP_NOTES, encoding="utf-8")
    (root / "design" / "solid.md").write_text(SOLID_NOTES, encoding="utf-8")
    (root / "devops.md").write_text(DEVOPS_NOTES, encoding="utf-8")
    (root / "readme.txt").write_text("# Not markdown\n", encoding="utf-8")
    return root


@pytest.fixture
def tokenizer():
    return Tokenizer()


@pytest.fixture(autouse=True)
def reset_qbank_logger():
    """Detach handlers installed by configure_logging() during a test."""
    yield
    logger = logging.getLogger("qbank")
    for handler in list(logger.handlers):
        if getattr(handler, "_qbank_managed_handler", False):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(logging.NOTSET)
