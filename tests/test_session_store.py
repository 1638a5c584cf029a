"""
Unit tests for session_store module.

Tests slot identity, batch appends, finalized writes and removals on the
immutable Session value.
"""

import pytest

from MC_Libs.SessionLib.session_store import (
    ImageSlot,
    Session,
    StaleSlotError,
    append_originals,
    delete_slot,
    new_session,
    set_finalized,
)


class TestSession:
    """Tests for the Session value."""

    def test_new_session_is_empty(self):
        session = new_session(3)

        assert session.capacity == 3
        assert len(session) == 0
        assert session.active_slot_id is None
        assert session.free_capacity == 3

    def test_negative_capacity_raises(self):
        with pytest.raises(ValueError):
            Session(capacity=-1)

    def test_is_immutable(self):
        session = new_session(1)

        with pytest.raises(AttributeError):
            session.capacity = 2

    def test_position_lookup(self, make_encoded):
        session, ids = append_originals(new_session(3), [make_encoded(0), make_encoded(1)])

        assert session.position_of(ids[1]) == 1
        assert session.slot_id_at(0) == ids[0]

    def test_unknown_id_raises_stale(self):
        with pytest.raises(StaleSlotError):
            new_session(1).position_of(42)

    @pytest.mark.parametrize("position", [-1, 2, 10])
    def test_out_of_range_position_raises_stale(self, make_encoded, position):
        session, _ = append_originals(new_session(3), [make_encoded(0), make_encoded(1)])

        with pytest.raises(StaleSlotError):
            session.slot_id_at(position)

    def test_stale_slot_error_is_key_error(self):
        assert issubclass(StaleSlotError, KeyError)


class TestAppendOriginals:
    """Tests for append_originals function."""

    def test_appends_with_empty_finalized(self, make_encoded):
        images = [make_encoded(0), make_encoded(1)]

        session, ids = append_originals(new_session(3), images)

        assert session.originals == tuple(images)
        assert session.finalized == (None, None)
        assert ids == [0, 1]

    def test_ids_keep_increasing_across_batches(self, make_encoded):
        session, first = append_originals(new_session(5), [make_encoded(0)])
        session, second = append_originals(session, [make_encoded(1), make_encoded(2)])

        assert first == [0]
        assert second == [1, 2]
        assert session.next_slot_id == 3

    def test_ids_are_not_reused_after_removal(self, make_encoded):
        session, ids = append_originals(new_session(5), [make_encoded(0), make_encoded(1)])
        session, _ = delete_slot(session, ids[1])
        session, new_ids = append_originals(session, [make_encoded(2)])

        assert new_ids == [2]

    def test_truncates_to_capacity(self, make_encoded):
        session, _ = append_originals(new_session(3), [make_encoded(0), make_encoded(1)])
        session, ids = append_originals(session, [make_encoded(2), make_encoded(3)])

        assert len(session) == 3
        assert ids == [2]

    def test_does_not_change_input_session(self, make_encoded):
        empty = new_session(3)

        append_originals(empty, [make_encoded(0)])

        assert len(empty) == 0

    def test_leaves_active_crop_alone(self, make_encoded):
        session = Session(
            capacity=3,
            slots=(ImageSlot(0, make_encoded(0)),),
            active_slot_id=0,
            next_slot_id=1,
        )

        session, _ = append_originals(session, [make_encoded(1)])

        assert session.active_slot_id == 0


class TestSetFinalized:
    """Tests for set_finalized function."""

    def test_sets_only_target_slot(self, make_encoded):
        session, ids = append_originals(new_session(3), [make_encoded(0), make_encoded(1)])

        session = set_finalized(session, ids[1], make_encoded("f1"))

        assert session.finalized == (None, make_encoded("f1"))
        assert session.originals == (make_encoded(0), make_encoded(1))
        assert session.finalized_count == 1

    def test_overwrites(self, make_encoded):
        session, ids = append_originals(new_session(1), [make_encoded(0)])
        session = set_finalized(session, ids[0], make_encoded("a"))

        session = set_finalized(session, ids[0], make_encoded("b"))

        assert session.finalized == (make_encoded("b"),)

    def test_stale_id_leaves_session_unchanged(self, make_encoded):
        session, _ = append_originals(new_session(1), [make_encoded(0)])

        with pytest.raises(StaleSlotError):
            set_finalized(session, 99, make_encoded("x"))

        assert session.finalized == (None,)


class TestDeleteSlot:
    """Tests for delete_slot function."""

    def test_shifts_later_slots_down(self, make_encoded):
        session, ids = append_originals(new_session(3), [make_encoded(i) for i in range(3)])
        session = set_finalized(session, ids[2], make_encoded("f2"))

        session, position = delete_slot(session, ids[1])

        assert position == 1
        assert session.originals == (make_encoded(0), make_encoded(2))
        assert session.finalized == (None, make_encoded("f2"))
        assert session.slot_id_at(1) == ids[2]

    def test_both_sequences_shrink_together(self, make_encoded):
        session, ids = append_originals(new_session(3), [make_encoded(i) for i in range(3)])

        session, _ = delete_slot(session, ids[0])

        assert len(session.originals) == len(session.finalized) == 2

    def test_unknown_id_raises(self):
        with pytest.raises(StaleSlotError):
            delete_slot(new_session(1), 0)
