"""Tests for content-addressed duplicate detection."""

import logging
import threading

from codecomplexity.metrics.duplication import (
    DuplicateIndex,
    Occurrence,
    content_hash,
    normalize_body,
)

BODY = "void run() {\n    step();\n}"
REFORMATTED = "void run()   {  step();\n\n\t}"


class TestNormalization:
    """Whitespace normalization and hashing."""

    def test_collapses_and_trims(self):
        assert normalize_body("  a \n\t b  ") == "a b"

    def test_reformatted_bodies_normalize_equal(self):
        assert normalize_body(BODY) == normalize_body(REFORMATTED)

    def test_hash_is_sha1_hex(self):
        digest = content_hash("abc")
        assert digest == "a9993e364706816aba3e25717850c26c9cd0d89d"

    def test_identifier_change_changes_hash(self):
        assert content_hash(normalize_body(BODY)) != content_hash(
            normalize_body(BODY.replace("step", "stop"))
        )


class TestDuplicateIndex:
    """Recording and resolving duplicate groups."""

    def test_whitespace_insensitive_match(self):
        index = DuplicateIndex()
        index.record(BODY, Occurrence("A.java", "run"))
        index.record(REFORMATTED, Occurrence("B.java", "run"))
        assert index.resolve_duplicate_groups() == {"A.java": {"B.java"}, "B.java": {"A.java"}}

    def test_links_are_symmetric(self):
        index = DuplicateIndex()
        for path in ["A.java", "B.java", "C.java"]:
            index.record(BODY, Occurrence(path, "run"))
        links = index.resolve_duplicate_groups()
        assert links["A.java"] == {"B.java", "C.java"}
        for path, others in links.items():
            for other in others:
                assert path in links[other]

    def test_no_self_links(self):
        index = DuplicateIndex()
        index.record(BODY, Occurrence("A.java", "run"))
        index.record(BODY, Occurrence("A.java", "run"))
        assert index.resolve_duplicate_groups() == {}
        assert len(index.duplicate_groups()) == 1

    def test_different_bodies_do_not_link(self):
        index = DuplicateIndex()
        index.record(BODY, Occurrence("A.java", "run"))
        index.record(BODY.replace("step", "stop"), Occurrence("B.java", "run"))
        assert index.resolve_duplicate_groups() == {}
        assert index.duplicate_groups() == []

    def test_groups_sorted(self):
        index = DuplicateIndex()
        index.record(BODY, Occurrence("B.java", "run"))
        index.record(BODY, Occurrence("A.java", "go"))
        groups = index.duplicate_groups()
        assert [o.file_path for o in groups[0].occurrences] == ["A.java", "B.java"]

    def test_sealed_index_ignores_records(self):
        index = DuplicateIndex()
        index.record(BODY, Occurrence("A.java", "run"))
        index.seal()
        assert index.sealed
        assert index.record(BODY, Occurrence("B.java", "run")) is None
        assert index.record_digests([("f" * 40, Occurrence("C.java", "x"))]) is False
        assert len(index) == 1
        assert index.resolve_duplicate_groups() == {}

    def test_unencodable_text_is_skipped(self, caplog):
        index = DuplicateIndex()
        with caplog.at_level(logging.WARNING, logger="codecomplexity"):
            digest = index.record("void bad() { \ud800 }", Occurrence("A.java", "bad"))
        assert digest is None
        assert len(index) == 0
        assert "bad" in caplog.text

    def test_concurrent_records(self):
        index = DuplicateIndex()
        bodies = [f"int m{i}() {{ return {i}; }}" for i in range(5)]

        def worker(n):
            for i in range(200):
                index.record(bodies[i % 5], Occurrence(f"F{n}.java", f"m{i % 5}"))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        entries = index.entries()
        assert len(entries) == 5
        assert sum(len(e.occurrences) for e in entries) == 8 * 200
        links = index.resolve_duplicate_groups()
        assert links["F0.java"] == {f"F{n}.java" for n in range(1, 8)}
