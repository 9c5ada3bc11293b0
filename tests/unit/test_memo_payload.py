"""
Unit tests for memo payload rebuild.

Covers tag extraction, derived content properties, location pass-through
and idempotence.
"""
from memoport_server.models.memo import Location
from memoport_server.utils import extract_tags, rebuild_payload


class TestTagExtraction:

    def test_tags_in_first_seen_order(self):
        assert extract_tags("#work notes for #ideas and #work again") == ["work", "ideas"]

    def test_nested_tags(self):
        assert extract_tags("filed under #projects/memoport") == ["projects/memoport"]

    def test_heading_is_not_a_tag(self):
        assert extract_tags("# Heading\n## Subheading\nbody") == []

    def test_tags_inside_code_are_ignored(self):
        content = "real #tag\n```\n#not_a_tag in code\n```\nand `#inline` too"
        assert extract_tags(content) == ["tag"]

    def test_url_fragment_is_not_a_tag(self):
        assert extract_tags("see https://example.com/page#section") == []

    def test_unicode_tags(self):
        assert extract_tags("#日本語 and #café") == ["日本語", "café"]


class TestRebuildPayload:

    def test_plain_text(self):
        payload = rebuild_payload("just some words")
        assert payload.tags == []
        assert payload.location is None
        assert not payload.property.has_link
        assert not payload.property.has_task_list
        assert not payload.property.has_code
        assert not payload.property.has_incomplete_tasks

    def test_links(self):
        assert rebuild_payload("visit https://example.com").property.has_link
        assert rebuild_payload("a [link](https://example.com)").property.has_link

    def test_task_lists(self):
        done = rebuild_payload("- [x] finished")
        assert done.property.has_task_list
        assert not done.property.has_incomplete_tasks

        open_tasks = rebuild_payload("- [x] finished\n- [ ] pending")
        assert open_tasks.property.has_task_list
        assert open_tasks.property.has_incomplete_tasks

    def test_code(self):
        assert rebuild_payload("use `pip install`").property.has_code
        assert rebuild_payload("```python\nprint(1)\n```").property.has_code

    def test_link_inside_code_does_not_count(self):
        payload = rebuild_payload("`https://example.com`")
        assert payload.property.has_code
        assert not payload.property.has_link

    def test_location_is_kept(self):
        location = Location(placeholder="Berlin", latitude=52.52, longitude=13.405)
        payload = rebuild_payload("#travel", location)
        assert payload.location == location
        assert payload.tags == ["travel"]

    def test_idempotent(self):
        content = "#a #b\n- [ ] task\nhttps://example.com\n`code`"
        location = Location(placeholder="Home", latitude=1.0, longitude=2.0)
        assert rebuild_payload(content, location) == rebuild_payload(content, location)
