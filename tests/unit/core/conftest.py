"""Shared fixtures for core unit tests"""

from datetime import datetime
from uuid import UUID

import pytest

from newsdoc.core.models import ArticleDoc, CollectionDoc


SAMPLE_BODY = (
    "<h2>Markets</h2>"
    "<p>Stocks <strong>rallied</strong> on <em>Monday</em>.</p>"
    "<ul><li>Tech up</li><li>Energy down</li></ul>"
    "<blockquote>Quiet optimism.</blockquote>"
)


@pytest.fixture(name="article")
def article_fixture():
    return ArticleDoc(
        id=UUID("00000000-0000-0000-0000-000000000001"),
        heading="Markets wrap",
        subheading="A calm week",
        author="Dana Reyes",
        media_name="The Ledger",
        media_url="https://ledger.example/markets",
        body=SAMPLE_BODY,
        date=datetime(2026, 3, 2),
    )


@pytest.fixture(name="collection")
def collection_fixture(article):
    second = ArticleDoc(
        id=UUID("00000000-0000-0000-0000-000000000002"),
        heading="Weather",
        author="Sam Ito",
        body="<p>Rain.</p>",
        date=datetime(2026, 3, 3),
    )
    return CollectionDoc(
        id=UUID("00000000-0000-0000-0000-0000000000aa"),
        title="Weekly Brief",
        description="Top stories",
        articles=[article, second],
    )
