"""
Tests for operator/machine label extraction and merging
"""
import pytest

from photosearch.ingest.labels import custom_labels, detect_labels, merge_labels
from conftest import FakeLabeler


def test_custom_labels_split_trim_lower():
    assert custom_labels({"customlabels": " Beach,  SUNSET ,beach"}) == {"beach", "sunset"}


def test_custom_labels_alternate_key():
    assert custom_labels({"custom-labels": "Dog"}) == {"dog"}


def test_custom_labels_primary_key_wins():
    meta = {"customlabels": "cat", "custom-labels": "dog"}
    assert custom_labels(meta) == {"cat"}


@pytest.mark.parametrize("meta", [{}, {"other": "x"}, {"customlabels": ""}, {"customlabels": " , ,"}])
def test_custom_labels_missing_or_empty(meta):
    assert custom_labels(meta) == set()


def test_custom_labels_no_empty_or_case_duplicates():
    labels = custom_labels({"customlabels": "Tree,tree,,TREE , Sky"})
    assert "" not in labels
    assert labels == {"tree", "sky"}


def test_detect_labels_requests_limits_and_lowercases():
    labeler = FakeLabeler({("b", "k.jpg"): ["Beach", "Ocean", "beach"]})

    assert detect_labels(labeler, "b", "k.jpg") == {"beach", "ocean"}
    assert labeler.calls == [("b", "k.jpg", 50, 60)]


def test_detect_labels_propagates_errors():
    labeler = FakeLabeler({("b", "k.jpg"): RuntimeError("throttled")})

    with pytest.raises(RuntimeError):
        detect_labels(labeler, "b", "k.jpg")


def test_merge_is_union():
    a, b = {"beach", "sunset"}, {"beach", "ocean"}
    assert merge_labels(a, b) == {"beach", "sunset", "ocean"}
    assert merge_labels(a, b) == merge_labels(b, a)
    assert merge_labels(a, a) == a
    assert merge_labels(set(), b) == b
