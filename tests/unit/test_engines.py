"""Unit tests for the two-engine data container."""

from fadec.core.engines import EngineData, EngineNumber


class TestEngineData:
    def test_new_shares_value(self):
        data = EngineData.new(5.0)
        assert data.engine1 == 5.0
        assert data.engine2 == 5.0

    def test_new_from_builds_each_slot(self):
        data = EngineData.new_from(lambda e: [e.index])
        assert data.engine1 == [1]
        assert data.engine2 == [2]
        assert data.engine1 is not data.engine2

    def test_indexing(self):
        data = EngineData.new_distinct(1, 2)
        assert data[EngineNumber.ENGINE1] == 1
        data[EngineNumber.ENGINE2] += 5
        assert data.engine2 == 7

    def test_iteration_order(self):
        data = EngineData.new_distinct("a", "b")
        assert list(data) == ["a", "b"]
        assert list(data.items()) == [(EngineNumber.ENGINE1, "a"), (EngineNumber.ENGINE2, "b")]

    def test_map(self):
        data = EngineData.new(5.0).map(lambda _, t: t * 0.4)
        assert data == EngineData(2.0, 2.0)

    def test_update_in_place(self):
        data = EngineData.new_distinct(1, 2)
        data.update(lambda e, v: v + e.index)
        assert data == EngineData(2, 4)

    def test_zip(self):
        data = EngineData.new_distinct(1, 2)
        data.zip(EngineData.new_distinct(10, 20), lambda _, a, b: a + b)
        assert data == EngineData(11, 22)

    def test_for_each(self):
        seen = []
        EngineData.new_distinct("x", "y").for_each(lambda e, v: seen.append((e.value, v)))
        assert seen == [("engine1", "x"), ("engine2", "y")]

    def test_replace_copies(self):
        data = EngineData.new(0)
        changed = data.replace(EngineNumber.ENGINE2, 9)
        assert changed == EngineData(0, 9)
        assert data == EngineData(0, 0)
