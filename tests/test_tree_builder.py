"""
Tests for the Tree Builder: flat node records to a nested org chart.
Pure functions only, no store or HTTP involved.
"""

import sys

import pytest

from api.exceptions.errors import MalformedDataError
from api.services.tree_builder import build_tree, build_tree_report
from tests.helpers import make_record, make_records


def _edges(root):
    """(parent_id, child_id) pairs of the built tree."""
    return {(node.id, child.id) for node in root.walk() for child in node.children}


WELL_FORMED_CASES = [
    {
        "test_id": "TREE_001",
        "description": "single root",
        "specs": [("root", "branch", None)],
    },
    {
        "test_id": "TREE_002",
        "description": "root, branch, member (A/B/C scenario)",
        "specs": [
            ("A", "branch", None),
            ("B", "branch", "A"),
            ("C", "member", "B"),
        ],
    },
    {
        "test_id": "TREE_003",
        "description": "wide and deep mix",
        "specs": [
            ("root", "branch", None),
            ("eng", "branch", "root"),
            ("ops", "branch", "root"),
            ("ann", "member", "eng"),
            ("bob", "member", "eng"),
            ("infra", "branch", "ops"),
            ("cat", "member", "infra"),
            ("dan", "member", "ops"),
        ],
    },
    {
        "test_id": "TREE_004",
        "description": "child listed before its parent",
        "specs": [
            ("leaf", "member", "mid"),
            ("root", "branch", None),
            ("mid", "branch", "root"),
        ],
    },
    {
        "test_id": "TREE_005",
        "description": "member with children (allowed at the data layer)",
        "specs": [
            ("root", "branch", None),
            ("ann", "member", "root"),
            ("ann-sub", "member", "ann"),
        ],
    },
]


@pytest.mark.parametrize(
    "case", WELL_FORMED_CASES, ids=[case["test_id"] for case in WELL_FORMED_CASES]
)
def test_every_node_attached_exactly_once(case):
    records = make_records(case["specs"])

    root = build_tree(records)

    assert root is not None
    visited = [node.id for node in root.walk()]
    assert sorted(visited) == sorted(record.id for record in records)
    assert len(visited) == len(set(visited))
    expected_edges = {
        (record.parent_id, record.id) for record in records if record.parent_id
    }
    assert _edges(root) == expected_edges


def test_scenario_root_branch_member():
    records = [
        make_record("A", "branch", None, offset=0, title="Root"),
        make_record("B", "branch", "A", offset=1, title="Eng"),
        make_record("C", "member", "B", offset=2, name="Ann", role="Lead", bio="..."),
    ]

    root = build_tree(records)

    assert root.id == "A"
    assert [child.id for child in root.children] == ["B"]
    branch_b = root.children[0]
    assert [child.id for child in branch_b.children] == ["C"]
    assert branch_b.children[0].children == []

    # Deleting B (and so C) and rebuilding leaves A alone
    remaining = [record for record in records if record.id not in {"B", "C"}]
    rebuilt = build_tree(remaining)
    assert rebuilt.id == "A"
    assert rebuilt.children == []


def test_children_keep_input_order():
    records = make_records(
        [
            ("root", "branch", None),
            ("third", "branch", "root"),
            ("first", "branch", "root"),
            ("second", "branch", "root"),
        ]
    )

    root = build_tree(records)

    assert [child.id for child in root.children] == ["third", "first", "second"]


@pytest.mark.parametrize(
    "specs",
    [
        pytest.param([], id="empty"),
        pytest.param(
            [("a", "branch", "b"), ("b", "branch", "a")], id="no_parentless_record"
        ),
        pytest.param([("a", "member", "missing")], id="only_orphans"),
    ],
)
def test_no_root(specs):
    assert build_tree(make_records(specs)) is None
    report = build_tree_report(make_records(specs))
    assert report.initialized is False
    assert report.root is None
    assert len(report.detached) == len(specs)


def test_multiple_roots_are_malformed():
    records = make_records(
        [("first", "branch", None), ("child", "member", "first"), ("second", "branch", None)]
    )

    with pytest.raises(MalformedDataError) as exc_info:
        build_tree(records)

    assert "first" in exc_info.value.detail
    assert "second" in exc_info.value.detail
    assert exc_info.value.status_code == 500


def test_duplicate_ids_are_malformed():
    records = [make_record("a", offset=0), make_record("a", parent_id="a", offset=1)]

    with pytest.raises(MalformedDataError):
        build_tree(records)


def test_orphans_and_cycles_are_reported_as_detached():
    records = make_records(
        [
            ("root", "branch", None),
            ("eng", "branch", "root"),
            ("orphan", "member", "deleted-parent"),
            ("orphan-child", "member", "orphan"),
            ("loop-a", "branch", "loop-b"),
            ("loop-b", "branch", "loop-a"),
            ("self", "branch", "self"),
        ]
    )

    report = build_tree_report(records)

    assert report.initialized is True
    assert {node.id for node in report.root.walk()} == {"root", "eng"}
    assert [record.id for record in report.detached] == [
        "orphan",
        "orphan-child",
        "loop-a",
        "loop-b",
        "self",
    ]


def test_input_records_are_not_mutated():
    records = make_records([("root", "branch", None), ("eng", "branch", "root")])
    snapshot = list(records)

    build_tree(records)
    build_tree(records)

    assert records == snapshot
    # Each build allocates fresh children lists
    assert len(build_tree(records).children) == 1


def test_to_dict_groups_member_fields():
    records = [
        make_record("root", "branch", None, offset=0, title="Leads"),
        make_record(
            "ann",
            "member",
            "root",
            offset=1,
            name="Ann",
            role="Lead",
            bio="Builds things.",
            image_url="https://example.com/ann.png",
        ),
    ]

    payload = build_tree(records).to_dict()

    assert payload["id"] == "root"
    assert payload["title"] == "Leads"
    assert payload["parentId"] is None
    assert payload["memberDetails"] is None
    member = payload["children"][0]
    assert member["parentId"] == "root"
    assert member["memberDetails"] == {
        "name": "Ann",
        "bio": "Builds things.",
        "role": "Lead",
        "imageUrl": "https://example.com/ann.png",
    }
    assert member["children"] == []


def test_deep_chain_does_not_recurse_in_walk():
    depth = 5000
    specs = [("n0", "branch", None)] + [
        (f"n{i}", "branch", f"n{i - 1}") for i in range(1, depth)
    ]

    root = build_tree(make_records(specs))

    assert sum(1 for _ in root.walk()) == depth


def test_deep_chain_to_dict_keeps_every_level():
    depth = sys.getrecursionlimit() + 500
    specs = [("n0", "branch", None)] + [
        (f"n{i}", "branch", f"n{i - 1}") for i in range(1, depth)
    ]

    payload = build_tree(make_records(specs)).to_dict()

    level = 0
    node = payload
    while node["children"]:
        assert len(node["children"]) == 1
        child = node["children"][0]
        assert child["parentId"] == node["id"]
        node = child
        level += 1
    assert level == depth - 1
    assert node["id"] == f"n{depth - 1}"


def test_to_dict_keeps_sibling_order_below_each_parent():
    specs = [
        ("root", "branch", None),
        ("eng", "branch", "root"),
        ("ops", "branch", "root"),
        ("ann", "member", "eng"),
        ("bob", "member", "ops"),
        ("cid", "member", "eng"),
    ]

    payload = build_tree(make_records(specs)).to_dict()

    assert [c["id"] for c in payload["children"]] == ["eng", "ops"]
    assert [c["id"] for c in payload["children"][0]["children"]] == ["ann", "cid"]
    assert [c["id"] for c in payload["children"][1]["children"]] == ["bob"]
