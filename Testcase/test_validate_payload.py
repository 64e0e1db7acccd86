import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from validate_payload import category_key, validate_category_list, validate_category_detail


def test_category_list_ok():
    errors, warnings = validate_category_list([{"id": 1, "title": "x"}, {"id": 2}])
    assert errors == []
    assert warnings == []


def test_category_list_shape_errors():
    errors, _ = validate_category_list({"id": 1})
    assert errors

    errors, _ = validate_category_list([{"title": "no id"}, "nope", {"id": True}])
    assert len(errors) == 3


def test_category_list_duplicates_warn():
    errors, warnings = validate_category_list([{"id": 1}, {"id": 1}])
    assert errors == []
    assert warnings == ["Category pool contains duplicate ids"]


def test_category_list_mixed_type_duplicates_warn():
    _, warnings = validate_category_list([{"id": 7}, {"id": "7"}])
    assert warnings == ["Category pool contains duplicate ids"]


def test_category_key_matches_int_and_string_ids():
    assert category_key(7) == category_key("7")
    assert category_key(7) != category_key(8)


def test_category_detail_ok_with_extra_fields():
    data = {
        "title": "Authors",
        "clues": [{"question": "Hamlet Author", "answer": "Shakespeare", "value": 200}] * 5,
    }
    assert validate_category_detail(data, 5) == ([], [])


def test_category_detail_short_clue_list_warns():
    data = {"title": "Authors", "clues": [{"question": "q", "answer": "a"}]}
    errors, warnings = validate_category_detail(data, 5)
    assert errors == []
    assert warnings == ["Only 1 clues (expected 5)"]


def test_category_detail_only_kept_clues_are_checked():
    good = {"question": "q", "answer": "a"}
    data = {"title": "t", "clues": [good] * 5 + [{"question": None}]}
    assert validate_category_detail(data, 5)[0] == []
    assert validate_category_detail(data)[0] != []


def test_category_detail_shape_errors():
    assert validate_category_detail([], 5)[0]
    assert validate_category_detail({"clues": []}, 5)[0] == ["Missing or non-string 'title'"]
    assert validate_category_detail({"title": "t"}, 5)[0] == ["Missing or non-list 'clues'"]
