"""Tests for catalog lookups used by the entry form and the register."""


class TestResolve:
    def test_known_and_unknown(self, category_svc):
        assert category_svc.resolve("6").name == "Salary"
        unknown = category_svc.resolve("404")
        assert unknown.name == "Unknown"
        assert unknown.color_hex == "#999999"

    def test_first_id_for_type(self, category_svc):
        assert category_svc.first_id_for_type("expense") == "1"
        assert category_svc.first_id_for_type("income") == "6"


class TestChoicesForType:
    def test_choices_follow_type(self, category_svc):
        assert [c.id for c in category_svc.choices_for_type("expense")] == ["1", "2", "3", "4", "5"]
        assert [c.id for c in category_svc.choices_for_type("income")] == ["6", "7"]

    def test_kept_category_of_other_type_stays_selectable(self, category_svc):
        choices = category_svc.choices_for_type("expense", keep_id="6")
        assert [c.id for c in choices] == ["1", "2", "3", "4", "5", "6"]
        assert choices[-1].name == "Salary"

    def test_missing_category_keeps_its_id(self, category_svc):
        choices = category_svc.choices_for_type("expense", keep_id="404")
        assert choices[-1].id == "404"
        assert choices[-1].name == "Unknown"

    def test_kept_category_already_listed(self, category_svc):
        assert len(category_svc.choices_for_type("income", keep_id="7")) == 2
