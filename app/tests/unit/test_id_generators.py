"""Tests for models/ids.py."""

from models.ids import CounterIdGenerator, UuidIdGenerator


class TestCounterIdGenerator:
    def test_per_prefix_counters(self):
        gen = CounterIdGenerator()
        assert [gen.next_id("R"), gen.next_id("R"), gen.next_id("B")] == ["R1", "R2", "B1"]

    def test_reserve_advances_past_existing(self):
        gen = CounterIdGenerator()
        gen.reserve("R5", "R")
        assert gen.next_id("R") == "R6"

    def test_reserve_never_goes_backwards(self):
        gen = CounterIdGenerator({"R": 9})
        gen.reserve("R2", "R")
        assert gen.next_id("R") == "R10"

    def test_reserve_ignores_foreign_ids(self):
        gen = CounterIdGenerator()
        gen.reserve("node-abc", "R")
        gen.reserve("Rx", "R")
        assert gen.next_id("R") == "R1"

    def test_state_restore_reset(self):
        gen = CounterIdGenerator()
        gen.next_id("D")
        state = gen.state()
        assert state == {"D": 1}
        state["D"] = 99
        assert gen.next_id("D") == "D2"

        gen.restore({"D": 40})
        assert gen.next_id("D") == "D41"
        gen.reset()
        assert gen.next_id("D") == "D1"


class TestUuidIdGenerator:
    def test_unique(self):
        gen = UuidIdGenerator()
        ids = {gen.next_id("R") for _ in range(50)}
        assert len(ids) == 50
        assert all(i.startswith("R-") for i in ids)

    def test_stateless(self):
        gen = UuidIdGenerator()
        gen.next_id("R")
        assert gen.state() == {}
