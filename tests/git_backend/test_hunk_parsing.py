"""Tests for zero-context diff hunk parsing."""

from git_critic.filters import changed_line_numbers, contains_line
from git_critic.git.diff import parse_hunks
from git_critic.models import DiffHunk

RAW_DIFF = """\
diff --git a/lib/App.pm b/lib/App.pm
index 1111111..2222222 100644
--- a/lib/App.pm
+++ b/lib/App.pm
@@ -3 +3 @@ package App;
-my $x = 1;
+my $y = 2;
@@ -4,0 +5,2 @@ my $x = 1;
+print 'done';
+print 'again';
@@ -9,2 +10,0 @@ sub gone {
-    return;
-}
"""


class TestParseHunks:
    def test_headers_parsed_with_default_counts(self):
        assert parse_hunks(RAW_DIFF) == [
            DiffHunk(from_start=3, from_count=1, to_start=3, to_count=1),
            DiffHunk(from_start=4, from_count=0, to_start=5, to_count=2),
            DiffHunk(from_start=9, from_count=2, to_start=10, to_count=0),
        ]

    def test_no_diff(self):
        assert parse_hunks("") == []

    def test_carriage_return_in_body_is_not_a_header(self):
        raw = "@@ -2 +2 @@\n-my $s = 1;\n+my $s = 'a\r@@ -7 +7 @@';\n"
        assert parse_hunks(raw) == [DiffHunk(2, 1, 2, 1)]

    def test_to_lines(self):
        hunks = parse_hunks(RAW_DIFF)
        assert [list(h.to_lines) for h in hunks] == [[3], [5, 6], []]


class TestChangedLines:
    def test_sorted_and_deduplicated(self):
        hunks = [DiffHunk(9, 1, 9, 2), DiffHunk(1, 0, 3, 2), DiffHunk(9, 1, 10, 1)]
        assert changed_line_numbers(hunks) == [3, 4, 9, 10]

    def test_contains_line(self):
        lines = [3, 4, 9]
        assert contains_line(lines, 3)
        assert contains_line(lines, 9)
        assert not contains_line(lines, 5)
        assert not contains_line(lines, 1)
        assert not contains_line(lines, 10)
        assert not contains_line([], 1)
