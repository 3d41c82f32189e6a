# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from prometheus_client import CONTENT_TYPE_LATEST, Counter, generate_latest

TOKEN_VERIFICATIONS = Counter(
    "socialnet_token_verifications_total",
    "Access token verifications",
    labelnames=("outcome",),
)
POST_MUTATIONS = Counter(
    "socialnet_post_mutations_total",
    "Post mutations by operation and outcome",
    labelnames=("operation", "outcome"),
)
POST_CONFLICTS = Counter(
    "socialnet_post_conflicts_total",
    "Optimistic concurrency conflicts on post documents",
    labelnames=("operation",),
)


def render_metrics() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST


__all__ = [
    "POST_CONFLICTS",
    "POST_MUTATIONS",
    "TOKEN_VERIFICATIONS",
    "render_metrics",
]
