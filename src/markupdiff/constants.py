#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for markupdiff.

This module centralizes default settings, persistence keys and other
hardcoded values used across the package.

Constants are organized by category:
1. Type Definitions - Literal types shared by several modules
2. Diff Settings Defaults - Values used when nothing is persisted
3. Persistence - Store keys and state file locations
4. Sample Markup - Initial before/after markup of a fresh session
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

LineClassification = Literal["added", "removed", "unchanged"]
AlignmentStatusName = Literal["added", "removed", "updated", "unchanged"]
ColorMode = Literal["auto", "always", "never"]

# =============================================================================
# Diff Settings Defaults
# =============================================================================

DEFAULT_IGNORE_WHITESPACE = False
DEFAULT_IGNORE_CASE = False
DEFAULT_CONTEXT_LINES = 3
DEFAULT_SHOW_LINE_NUMBERS = True
DEFAULT_HIGHLIGHT_SYNTAX = True

# Attribute used as explicit alignment identity in markup trees
KEY_ATTRIBUTE = "key"
# Prefix of the positional fallback key ("index-0", "index-1", ...)
POSITIONAL_KEY_PREFIX = "index-"

# =============================================================================
# Persistence
# =============================================================================

SETTINGS_STORE_KEY = "diffSettings"
HISTORY_STORE_KEY = "diffHistory"

STATE_DIR_ENV_VAR = "MARKUPDIFF_STATE_DIR"
DEFAULT_STATE_DIR = "~/.markupdiff"
STATE_FILENAME = "state.json"

CONFIG_ENV_VAR = "MARKUPDIFF_CONFIG"

CLEAR_HISTORY_PROMPT = "Are you sure you want to clear all history?"

# =============================================================================
# Sample Markup
# =============================================================================

SAMPLE_BEFORE_MARKUP = """<div className="container">
  <h1>Hello World</h1>
  <ul>
    <li>Item 1</li>
    <li>Item 2</li>
    <li>Item 3</li>
  </ul>
</div>"""

SAMPLE_AFTER_MARKUP = """<div className="container">
  <h1>Hello React</h1>
  <ul>
    <li>Item 1</li>
    <li>Item 4</li>
    <li>Item 3</li>
    <li>Item 5</li>
  </ul>
</div>"""
