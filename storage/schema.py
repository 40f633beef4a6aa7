# -*- coding: utf-8 -*-
"""Project file schema version (bump together with a migration)."""

from __future__ import annotations

PROJECT_VERSION = 2
