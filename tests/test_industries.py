"""
Industry target tests.
"""

from sim.gateway import GameCommand


class TestIndustryCriteria:
    def test_all(self, console, ctx):
        console("industry all count")
        assert ctx.output.texts() == ["Number of industries matched: 3, affected: 3"]

    def test_town_name_or_id(self, console):
        assert console("industry aberdeen count").matched == 1
        assert console("industry 2 count").matched == 1
        assert console("industry Coal count").matched == 0

    def test_keywords_and_trailing_text_are_not_ids(self, console):
        assert console("industry 1x count").matched == 0
        assert console("industry on count").matched == 0

    def test_production(self, console):
        assert console("industry production>0 count").matched == 1
        assert console("industry thisproduction=40 count").matched == 1

    def test_percent_transported(self, console):
        assert console("industry percent=80 count").matched == 1
        assert console("industry thispercent=25 count").matched == 1

    def test_percent_without_production_is_zero(self, console):
        assert console("industry percent=0 count").matched == 2


class TestIndustryCommands:
    def test_info(self, console, ctx):
        console("industry aberdeen info")
        assert ctx.output.texts() == [
            "ID: 1 Town: Aberdeen" + " " * 12,
            "  Size: 4 x 4",
            "  Cargo produced: coal (50 per month, 7 waiting)",
            "    This month transported/produced: 10/40 (25%)",
            "    Last month transported/produced: 80/100 (80%)",
            "  General production level: 16",
            "Number of industries matched: 1, affected: 1",
        ]

    def test_info_accepted_cargo(self, console, ctx):
        console("industry brighton info")
        assert ctx.output.texts()[2:4] == [
            "  General production level: 16",
            "  Cargo accepted: coal (waiting 5)",
        ]

    def test_center_and_open(self, console, ctx):
        console("industry 1 center")
        console("industry 1 show")
        assert ctx.viewport.tiles == [1000]
        assert ctx.viewport.windows == [("industry", 1)]

    def test_delete(self, live_console, live_ctx, world):
        result = live_console("industry cardiff delete")
        assert result.affected == 1
        assert 3 not in world.industries
        assert 3 in world.towns
        assert live_ctx.output.texts()[:2] == ["ID: 3 Town: Cardiff" + " " * 13, "  Size: 1 x 1"]
        assert live_ctx.gateway.commands() == [GameCommand.DELETE_INDUSTRY]

    def test_delete_all(self, live_console, world):
        assert live_console("industry all delete").affected == 3
        assert world.industries == {}
