"""Unit tests for the comment tree reducer."""

import random

import pytest

from canopy.domain.model import (
    AddComment,
    ClearAll,
    CommentsState,
    DeleteComment,
    DislikeComment,
    EditComment,
    LikeComment,
    ToggleCollapse,
)
from canopy.domain.service import (
    EMPTY_STATE,
    add_comment,
    clear_all,
    delete_comment,
    dislike_comment,
    edit_comment,
    like_comment,
    reduce,
    toggle_collapse,
)
from canopy.domain.value import CommentId, Vote
from canopy.util.tree import find_integrity_errors
from tests.conftest import build_tree, sequential_ids, ticking_clock

# c1 -> (c2 -> c4, c3), c5
THREAD = [
    (None, "first"),
    ("c1", "reply one"),
    ("c1", "reply two"),
    ("c2", "nested reply"),
    (None, "second"),
]


class TestAddComment:
    """Tests for add_comment."""

    def test_add_top_level_then_reply(self):
        """A root comment and a reply are linked both ways."""
        # Arrange
        ids = sequential_ids()
        state = CommentsState()

        # Act
        state, a = add_comment(state, None, "hi", id_factory=ids)
        state, b = add_comment(state, a, "reply", id_factory=ids)

        # Assert
        assert state.root_ids == (a,)
        assert state.by_id[a].child_ids == (b,)
        assert state.by_id[b].parent_id == a
        assert state.by_id[a].parent_id is None

    def test_new_comment_defaults(self):
        """New comments start with no children, zero counters and no edit stamp."""
        # Arrange
        clock = ticking_clock(start=5_000)

        # Act
        state, comment_id = add_comment(
            CommentsState(), None, "hello", clock=clock, id_factory=sequential_ids()
        )

        # Assert
        node = state.by_id[comment_id]
        assert node.text == "hello"
        assert node.created_at == 5_000
        assert node.updated_at is None
        assert node.child_ids == ()
        assert node.is_collapsed is False
        assert node.likes == 0
        assert node.dislikes == 0

    def test_roots_and_children_keep_insertion_order(self):
        """Roots and replies are appended at the end."""
        state = build_tree(THREAD)

        assert state.root_ids == ("c1", "c5")
        assert state.by_id["c1"].child_ids == ("c2", "c3")
        assert state.by_id["c2"].child_ids == ("c4",)

    def test_add_under_missing_parent_is_noop(self):
        """Replying to a comment that no longer exists changes nothing."""
        # Arrange
        state = build_tree(THREAD)

        # Act
        new_state, comment_id = add_comment(state, CommentId("missing-id"), "x")

        # Assert
        assert new_state is state
        assert comment_id is None
        assert len(new_state.by_id) == 5

    def test_text_is_stored_verbatim(self):
        """Text is neither trimmed nor sanitized."""
        text = "  <script>alert('x')</script>\n"

        state, comment_id = add_comment(CommentsState(), None, text)

        assert state.by_id[comment_id].text == text

    def test_empty_text_is_accepted(self):
        """Length rules belong to input collaborators, not the reducer."""
        state, comment_id = add_comment(CommentsState(), None, "")

        assert comment_id in state.by_id

    def test_generated_ids_are_unique(self):
        """Default id generation never repeats."""
        state = CommentsState()
        for _ in range(50):
            state, _ = add_comment(state, None, "x")

        assert len(state.by_id) == 50
        assert len(set(state.root_ids)) == 50

    def test_input_state_is_not_mutated(self):
        """The previous snapshot is left untouched."""
        # Arrange
        state = build_tree([(None, "root")])
        before = state.model_dump()

        # Act
        add_comment(state, CommentId("c1"), "reply")

        # Assert
        assert state.model_dump() == before
        assert state.by_id["c1"].child_ids == ()


class TestEditComment:
    """Tests for edit_comment."""

    def test_edit_replaces_text_and_stamps_updated_at(self):
        """Editing sets the new text and updated_at."""
        # Arrange
        state = build_tree(THREAD)

        # Act
        new_state = edit_comment(state, CommentId("c2"), "changed", clock=lambda: 42)

        # Assert
        assert new_state.by_id["c2"].text == "changed"
        assert new_state.by_id["c2"].updated_at == 42
        assert state.by_id["c2"].text == "reply one"

    def test_edit_keeps_children_counters_and_collapse(self):
        """Only text and updated_at change."""
        # Arrange
        state = build_tree(THREAD)
        state = like_comment(state, CommentId("c1"), Vote.NONE)
        state = toggle_collapse(state, CommentId("c1"))
        before = state.by_id["c1"]

        # Act
        after = edit_comment(state, CommentId("c1"), "new").by_id["c1"]

        # Assert
        assert after.child_ids == before.child_ids
        assert after.likes == before.likes
        assert after.dislikes == before.dislikes
        assert after.is_collapsed == before.is_collapsed
        assert after.created_at == before.created_at
        assert after.parent_id == before.parent_id

    def test_every_edit_restamps(self):
        """updated_at moves forward on each edit."""
        clock = ticking_clock(start=100, step=10)
        state = build_tree([(None, "a")])

        state = edit_comment(state, CommentId("c1"), "b", clock=clock)
        state = edit_comment(state, CommentId("c1"), "c", clock=clock)

        assert state.by_id["c1"].updated_at == 110

    def test_edit_unknown_id_is_noop(self):
        state = build_tree(THREAD)

        assert edit_comment(state, CommentId("nope"), "x") is state


class TestDeleteComment:
    """Tests for delete_comment."""

    def test_delete_root_with_reply_empties_tree(self):
        """Deleting the only root removes its reply as well."""
        state = build_tree([(None, "hi"), ("c1", "reply")])

        new_state = delete_comment(state, CommentId("c1"))

        assert new_state.by_id == {}
        assert new_state.root_ids == ()

    def test_cascade_removes_subtree_and_nothing_else(self):
        """Deleting c2 removes c2 and c4 (one descendant) only."""
        # Arrange
        state = build_tree(THREAD)

        # Act
        new_state = delete_comment(state, CommentId("c2"))

        # Assert
        assert len(state.by_id) - len(new_state.by_id) == 2
        assert set(new_state.by_id) == {"c1", "c3", "c5"}
        for cid in ("c3", "c5"):
            assert new_state.by_id[cid] == state.by_id[cid]

    def test_delete_reply_unlinks_from_parent(self):
        """The parent's child list loses the deleted id, keeping sibling order."""
        state = build_tree(THREAD)

        new_state = delete_comment(state, CommentId("c2"))

        assert new_state.by_id["c1"].child_ids == ("c3",)
        assert new_state.root_ids == ("c1", "c5")

    def test_delete_root_unlinks_from_root_ids(self):
        state = build_tree(THREAD)

        new_state = delete_comment(state, CommentId("c1"))

        assert new_state.root_ids == ("c5",)
        assert set(new_state.by_id) == {"c5"}

    def test_delete_leaf(self):
        state = build_tree(THREAD)

        new_state = delete_comment(state, CommentId("c4"))

        assert "c4" not in new_state.by_id
        assert new_state.by_id["c2"].child_ids == ()

    def test_delete_deep_chain(self):
        """Long reply chains are removed without hitting the recursion limit."""
        # Arrange
        depth = 1500
        spec = [(None, "root")] + [(f"c{i}", f"reply {i}") for i in range(1, depth)]
        state = build_tree(spec)

        # Act
        new_state = delete_comment(state, CommentId("c1"))

        # Assert
        assert len(state.by_id) == depth
        assert new_state.by_id == {}

    def test_delete_unknown_id_is_noop(self):
        state = build_tree(THREAD)

        assert delete_comment(state, CommentId("nope")) is state

    def test_delete_twice_is_noop_second_time(self):
        """A delete racing with an earlier delete of the same comment does nothing."""
        state = delete_comment(build_tree(THREAD), CommentId("c2"))

        assert delete_comment(state, CommentId("c2")) is state
        assert delete_comment(state, CommentId("c4")) is state


class TestToggleCollapse:
    """Tests for toggle_collapse."""

    def test_first_toggle_collapses(self):
        state = build_tree(THREAD)

        new_state = toggle_collapse(state, CommentId("c1"))

        assert new_state.by_id["c1"].is_collapsed is True

    def test_double_toggle_restores_original(self):
        """Toggling twice returns to the never-collapsed value."""
        state = build_tree(THREAD)

        new_state = toggle_collapse(toggle_collapse(state, CommentId("c1")), CommentId("c1"))

        assert new_state.by_id["c1"].is_collapsed is False
        assert new_state == state

    def test_toggle_does_not_touch_children(self):
        state = build_tree(THREAD)

        new_state = toggle_collapse(state, CommentId("c1"))

        assert new_state.by_id["c2"] is state.by_id["c2"]
        assert new_state.by_id["c1"].child_ids == ("c2", "c3")

    def test_toggle_unknown_id_is_noop(self):
        state = build_tree(THREAD)

        assert toggle_collapse(state, CommentId("nope")) is state


class TestLikeComment:
    """Tests for like_comment."""

    @pytest.mark.parametrize(
        "previous, expected_likes, expected_dislikes",
        [
            (Vote.NONE, 4, 2),  # new like
            (Vote.LIKE, 2, 2),  # toggle off
            (Vote.DISLIKE, 4, 1),  # switch
        ],
    )
    def test_like_transition_table(self, previous, expected_likes, expected_dislikes):
        """Counters follow the like transition table."""
        # Arrange
        state = build_tree([(None, "a")])
        node = state.by_id["c1"].model_copy(update={"likes": 3, "dislikes": 2})
        state = CommentsState(by_id={"c1": node}, root_ids=state.root_ids)

        # Act
        new_state = like_comment(state, CommentId("c1"), previous)

        # Assert
        assert new_state.by_id["c1"].likes == expected_likes
        assert new_state.by_id["c1"].dislikes == expected_dislikes

    def test_like_then_unlike_restores_count(self):
        """Liking then liking again with previous LIKE returns to the original count."""
        state = build_tree([(None, "a")])

        liked = like_comment(state, CommentId("c1"), Vote.NONE)
        unliked = like_comment(liked, CommentId("c1"), Vote.LIKE)

        assert liked.by_id["c1"].likes == 1
        assert unliked.by_id["c1"].likes == 0

    def test_wrong_previous_vote_drives_counter_negative(self):
        """Counters are not clamped, a desynced caller is visible as drift."""
        state = build_tree([(None, "a")])

        new_state = like_comment(state, CommentId("c1"), Vote.LIKE)

        assert new_state.by_id["c1"].likes == -1

    def test_switch_from_phantom_dislike_goes_negative(self):
        state = build_tree([(None, "a")])

        new_state = like_comment(state, CommentId("c1"), Vote.DISLIKE)

        assert new_state.by_id["c1"].likes == 1
        assert new_state.by_id["c1"].dislikes == -1

    def test_like_unknown_id_is_noop(self):
        state = build_tree(THREAD)

        assert like_comment(state, CommentId("nope"), Vote.NONE) is state


class TestDislikeComment:
    """Tests for dislike_comment."""

    @pytest.mark.parametrize(
        "previous, expected_likes, expected_dislikes",
        [
            (Vote.NONE, 3, 3),  # new dislike
            (Vote.DISLIKE, 3, 1),  # toggle off
            (Vote.LIKE, 2, 3),  # switch
        ],
    )
    def test_dislike_transition_table(
        self, previous, expected_likes, expected_dislikes
    ):
        """Counters follow the mirrored transition table."""
        # Arrange
        state = build_tree([(None, "a")])
        node = state.by_id["c1"].model_copy(update={"likes": 3, "dislikes": 2})
        state = CommentsState(by_id={"c1": node}, root_ids=state.root_ids)

        # Act
        new_state = dislike_comment(state, CommentId("c1"), previous)

        # Assert
        assert new_state.by_id["c1"].likes == expected_likes
        assert new_state.by_id["c1"].dislikes == expected_dislikes

    def test_dislike_toggle_symmetry(self):
        state = build_tree([(None, "a")])

        state = dislike_comment(state, CommentId("c1"), Vote.NONE)
        state = dislike_comment(state, CommentId("c1"), Vote.DISLIKE)

        assert state.by_id["c1"].dislikes == 0

    def test_dislike_unknown_id_is_noop(self):
        state = build_tree(THREAD)

        assert dislike_comment(state, CommentId("nope"), Vote.LIKE) is state


class TestClearAll:
    """Tests for clear_all."""

    def test_clear_all_returns_empty_state(self):
        assert clear_all() == CommentsState()
        assert clear_all().by_id == {}
        assert clear_all().root_ids == ()

    def test_reduce_clear_all_ignores_previous_state(self):
        state = build_tree(THREAD)

        assert reduce(state, ClearAll()) is EMPTY_STATE


class TestReduce:
    """Tests for intent dispatch."""

    def test_reduce_add_comment(self):
        new_state = reduce(
            CommentsState(),
            AddComment(parent_id=None, text="hi"),
            id_factory=sequential_ids(),
            clock=lambda: 7,
        )

        assert new_state.root_ids == ("c1",)
        assert new_state.by_id["c1"].created_at == 7

    def test_reduce_routes_every_intent(self):
        """Each intent type reaches its transition."""
        state = build_tree(THREAD)

        state = reduce(state, EditComment(id="c3", text="edited"), clock=lambda: 9)
        state = reduce(state, ToggleCollapse(id="c3"))
        state = reduce(state, LikeComment(id="c3", previous_vote=Vote.NONE))
        state = reduce(state, DislikeComment(id="c5"))
        state = reduce(state, DeleteComment(id="c2"))

        assert state.by_id["c3"].text == "edited"
        assert state.by_id["c3"].updated_at == 9
        assert state.by_id["c3"].is_collapsed is True
        assert state.by_id["c3"].likes == 1
        assert state.by_id["c5"].dislikes == 1
        assert "c2" not in state.by_id and "c4" not in state.by_id

    @pytest.mark.parametrize(
        "intent",
        [
            EditComment(id="ghost", text="x"),
            DeleteComment(id="ghost"),
            ToggleCollapse(id="ghost"),
            LikeComment(id="ghost", previous_vote=Vote.NONE),
            DislikeComment(id="ghost", previous_vote=Vote.LIKE),
            AddComment(parent_id="ghost", text="x"),
        ],
    )
    def test_unknown_targets_return_same_state(self, intent):
        """Intents aimed at missing comments are reference-stable no-ops."""
        state = build_tree(THREAD)

        new_state = reduce(state, intent)

        assert new_state is state
        assert new_state == build_tree(THREAD)

    def test_reduce_rejects_unknown_intent(self):
        with pytest.raises(TypeError, match="Unknown intent"):
            reduce(CommentsState(), object())


class TestTreeInvariants:
    """Random add/delete sequences never break the forest invariants."""

    @pytest.mark.parametrize("seed", [1, 7, 42, 2024])
    def test_random_operations_keep_tree_consistent(self, seed):
        # Arrange
        rng = random.Random(seed)
        ids = sequential_ids()
        state = CommentsState()

        # Act
        for step in range(300):
            existing = list(state.by_id)
            roll = rng.random()
            if roll < 0.55 or not existing:
                parent = rng.choice(existing) if existing and rng.random() < 0.7 else None
                state, _ = add_comment(state, parent, f"step {step}", id_factory=ids)
            elif roll < 0.75:
                state = delete_comment(state, rng.choice(existing))
            elif roll < 0.85:
                state = toggle_collapse(state, rng.choice(existing))
            else:
                state = add_comment(state, CommentId("gone"), "orphan", id_factory=ids)[0]

            # Assert
            assert find_integrity_errors(state) == []
