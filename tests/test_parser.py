"""Tests for parsing Strapi API responses."""

import pytest

from strapi_sync.input.parser import parse_articles


def test_parse_flat_v5_records():
    payload = {
        "data": [
            {
                "id": 7,
                "documentId": "k3x9",
                "title": "你好",
                "slug": None,
                "publishedAt": "2024-01-02T03:04:05.000Z",
                "content": [{"type": "paragraph", "children": [{"text": "hi"}]}],
                "category": {"id": 1, "name": "随笔"},
                "coverImage": {"id": 4, "url": "/uploads/cover.png"},
            }
        ],
        "meta": {"pagination": {"page": 1, "pageCount": 1}},
    }

    articles = parse_articles(payload)

    assert len(articles) == 1
    article = articles[0]
    assert article.id == 7
    assert article.title == "你好"
    assert article.slug is None
    assert article.published_at == "2024-01-02T03:04:05.000Z"
    assert article.content[0]["type"] == "paragraph"
    assert article.category == "随笔"
    assert article.cover_image_url == "/uploads/cover.png"


def test_parse_v4_attributes_and_relation_wrappers():
    payload = {
        "data": [
            {
                "id": 3,
                "attributes": {
                    "title": "Hello",
                    "slug": "hello",
                    "publishedAt": "2024-01-02T03:04:05.000Z",
                    "content": [],
                    "category": {"data": {"id": 2, "attributes": {"name": "Tech"}}},
                    "coverImage": {"data": {"id": 9, "attributes": {"url": "https://cdn/x.png"}}},
                },
            }
        ]
    }

    article = parse_articles(payload)[0]

    assert article.id == 3
    assert article.slug == "hello"
    assert article.category == "Tech"
    assert article.cover_image_url == "https://cdn/x.png"


def test_empty_relations_and_slug_become_none():
    payload = {
        "data": [
            {
                "id": 3,
                "attributes": {
                    "title": "Hello",
                    "slug": "",
                    "publishedAt": "2024-01-02T03:04:05.000Z",
                    "category": {"data": None},
                    "coverImage": {"data": None},
                },
            }
        ]
    }

    article = parse_articles(payload)[0]

    assert article.slug is None
    assert article.category is None
    assert article.cover_image_url is None


def test_missing_content_becomes_empty_list():
    articles = parse_articles([{"id": 1, "title": "T", "publishedAt": "2024-01-01", "content": None}])
    assert articles[0].content == []


def test_cover_image_list_uses_first_entry():
    articles = parse_articles(
        [{"id": 1, "title": "T", "coverImage": [{"url": "/a.png"}, {"url": "/b.png"}]}]
    )
    assert articles[0].cover_image_url == "/a.png"


def test_records_without_title_are_skipped():
    articles = parse_articles({"data": [{"id": 1, "title": ""}, {"id": 2, "title": "Kept"}, "junk"]})
    assert [a.id for a in articles] == [2]


def test_missing_data_key_raises():
    with pytest.raises(ValueError, match="missing 'data'"):
        parse_articles({"error": {"status": 404}})
