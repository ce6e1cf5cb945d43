"""
Tests for the raw event predicates
"""

from semwatch.core.events import ModifyKind, RawEvent, RemoveKind
from semwatch.core.filters import (
    first_unqualified_removal,
    has_unqualified_removal,
    should_ignore,
)


class TestShouldIgnore:
    """Test the ignore filter"""

    def test_empty_paths_ignored(self):
        """Test that events without paths carry nothing to act on"""
        assert should_ignore(RawEvent.other())
        assert should_ignore(RawEvent.remove(RemoveKind.ANY))

    def test_metadata_sidecar_ignored(self):
        """Test the default reserved file name"""
        assert should_ignore(RawEvent.create('/d/.DS_Store'))
        assert should_ignore(RawEvent.modify(ModifyKind.NAME, '/d/a.txt', '/d/.DS_Store'))

    def test_suffix_is_not_enough(self):
        """Test that only the full final component counts"""
        assert not should_ignore(RawEvent.create('/d/backup.DS_Store'))
        assert not should_ignore(RawEvent.create('/.DS_Store/a.txt'))

    def test_regular_file_kept(self):
        assert not should_ignore(RawEvent.create('/d/a.txt'))

    def test_custom_names(self):
        """Test passing a different set of reserved names"""
        event = RawEvent.create('/d/desktop.ini')
        assert should_ignore(event, ignore_names=['desktop.ini', 'Thumbs.db'])
        assert not should_ignore(RawEvent.create('/d/.DS_Store'), ignore_names=['desktop.ini'])


class TestUnqualifiedRemoval:
    """Test the remove-any detector"""

    def test_detects_remove_any(self):
        batch = [RawEvent.create('/e/b'), RawEvent.remove(RemoveKind.ANY, '/d/a')]
        assert has_unqualified_removal(batch)
        assert first_unqualified_removal(batch) == batch[1]

    def test_qualified_removal_not_detected(self):
        batch = [RawEvent.remove(RemoveKind.OTHER, '/d/a'), RawEvent.modify(ModifyKind.ANY, '/d/b')]
        assert not has_unqualified_removal(batch)
        assert first_unqualified_removal(batch) is None

    def test_empty_batch(self):
        assert not has_unqualified_removal([])

    def test_ignored_removals_count_by_default(self):
        """Test that detection looks at every event unless told otherwise"""
        batch = [RawEvent.remove(RemoveKind.ANY, '/d/.DS_Store')]
        assert has_unqualified_removal(batch)
        assert not has_unqualified_removal(batch, skip_ignored=True)

    def test_skip_ignored_finds_later_removal(self):
        """Test that skipping an ignored removal falls through to the next one"""
        batch = [
            RawEvent.remove(RemoveKind.ANY),
            RawEvent.remove(RemoveKind.ANY, '/d/a.txt'),
        ]
        assert first_unqualified_removal(batch) == batch[0]
        assert first_unqualified_removal(batch, skip_ignored=True) == batch[1]

    def test_require_paths_passes_over_pathless_removal(self):
        """Test looking for a removal that can name a move source"""
        batch = [
            RawEvent.remove(RemoveKind.ANY),
            RawEvent.remove(RemoveKind.ANY, '/d/a.txt'),
        ]
        assert first_unqualified_removal(batch, require_paths=True) == batch[1]
        assert first_unqualified_removal(batch[:1], require_paths=True) is None
