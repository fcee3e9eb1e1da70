"""
Vehicle target tests: criteria, per-vehicle preconditions and commands.
"""

import pytest

from sim.gateway import CommandRequest, GameCommand
from sim.types import Order, OrderType

from console.targets.vehicles import clamp_service_interval

from conftest import LOCAL, RIVAL


def requests(ctx):
    return ctx.gateway.requests


class TestVehicleSelection:
    """Which vehicles a target lists and how criteria select them."""

    def test_only_local_vehicles_of_the_type(self, console):
        result = console("train all count")
        assert (result.matched, result.affected) == (2, 2)

    def test_vehicle_lists_every_type(self, console, ctx):
        result = console("vehicle all count")
        assert result.matched == 5
        assert ctx.output.texts()[-1] == "Number of vehicles matched: 5, affected: 5"

    def test_road_vehicle_summary_name(self, console, ctx):
        console("road all count")
        assert ctx.output.texts()[-1] == "Number of road vehicles matched: 1, affected: 1"

    def test_unit_number(self, console):
        assert console("train 2 count").matched == 1
        assert console("vehicle 1 count").matched == 4
        assert console("vehicle 42 count").matched == 0
        assert console("train true count").matched == 0
        assert console("train 1x count").matched == 0

    def test_identifier_ignores_operator(self, console):
        # Unknown key: the operand is still compared for equality
        assert console("train colour>1 count").matched == 1
        assert console("vehicle =1 count").matched == 4

    def test_age_in_years(self, console):
        assert console("train age<5 count").matched == 1
        assert console("train age>=10 count").matched == 1

    def test_max_speed_of_consist(self, console):
        assert console("train maxspeed=120 count").matched == 1
        assert console("train maxspeed=160 count").matched == 0
        assert console("road maxspeed=96 count").matched == 1

    def test_length_and_wagons_only_for_trains(self, console):
        assert console("train len=3 count").matched == 1
        assert console("train wagons=4 count").matched == 1
        assert console("vehicle wagons>0 count").matched == 2

    def test_profit(self, console):
        assert console("train profit>=3000 count").matched == 1
        assert console("train profit_this<0 count").matched == 1
        assert console("train profit_last=2000 count").matched == 1

    def test_malformed_operand_matches_nothing(self, console):
        result = console("train profit=abc count")
        assert (result.handled, result.matched) == (True, 0)

    def test_boolean_states(self, console):
        assert console("vehicle crashed count").matched == 1
        assert console("vehicle broken count").matched == 1
        assert console("vehicle depot count").matched == 1

    def test_speed_orders_service_breakdowns(self, console):
        assert console("vehicle speed>=100 count").matched == 2
        assert console("vehicle orders=2 count").matched == 2
        assert console("vehicle service=150 count").matched == 5
        assert console("vehicle breakdowns=0 count").matched == 5

    def test_conjunction_order_does_not_matter(self, console):
        assert console("train age<5 & maxspeed=120 count").matched == 1
        assert console("train maxspeed=120 and age<5 count").matched == 1
        assert console("train age<5 and depot count").matched == 0


class TestGroups:
    """Group names as identifiers and the group criterion."""

    def test_exact_group_name(self, console):
        assert console("train Coal count").matched == 1

    def test_case_insensitive_group_name(self, console):
        # 'coal' is also a prefix of 'Coal Express'; the full name wins
        assert console("train coal count").matched == 1

    def test_unique_prefix(self, console):
        assert console("train pass count").matched == 1

    def test_ambiguous_prefix_is_not_a_group(self, console):
        assert console("train co count").matched == 0

    def test_other_company_groups_are_ignored(self, console):
        assert console("train Rival count").matched == 0

    def test_numeric_identifier_is_never_a_group(self, console, ctx):
        # Train 1 is in group 1; the token still means unit number 2
        ctx.world.groups[1].name = "2"
        console("train 2 info")
        assert ctx.output.texts()[0].startswith("#   2,")

    def test_group_criterion(self, console):
        assert console("train group=coal count").matched == 1
        assert console("train group<m count").matched == 1
        assert console("train group<>coal count").matched == 1

    def test_unnamed_group_default_name(self, console, ctx):
        ctx.world.groups[3].name = None
        assert console("train group=group count").matched == 0
        # 'Group 3' sorts after 'group', 'Coal' before it
        assert console("train group>group count").matched == 1


class TestPreconditions:
    """Commands skip vehicles that fail their per-vehicle requirements."""

    def test_stop_skips_stopped(self, console, ctx):
        result = console("train all stop")
        assert (result.matched, result.affected) == (2, 1)
        assert requests(ctx) == [CommandRequest(GameCommand.START_STOP_VEHICLE, 1)]

    def test_start_skips_running_and_crashed(self, console, ctx):
        result = console("vehicle all start")
        assert (result.matched, result.affected) == (5, 1)
        assert requests(ctx) == [CommandRequest(GameCommand.START_STOP_VEHICLE, 2)]

    def test_sell_needs_stopped_in_depot(self, console, ctx):
        result = console("train all sell")
        assert (result.matched, result.affected) == (2, 1)
        assert requests(ctx) == [CommandRequest(GameCommand.SELL_VEHICLE, 2, 1)]

    def test_sell_road_vehicle_p1(self, console, ctx):
        ctx.world.vehicles[3].stopped = True
        ctx.world.vehicles[3].in_depot = True
        console("road all sell")
        assert requests(ctx) == [CommandRequest(GameCommand.SELL_VEHICLE, 3, 0)]

    def test_turn_checks_vehicle_type(self, console, ctx):
        result = console("vehicle all turn")
        assert (result.matched, result.affected) == (5, 3)
        assert requests(ctx) == [
            CommandRequest(GameCommand.REVERSE_TRAIN_DIRECTION, 1),
            CommandRequest(GameCommand.REVERSE_TRAIN_DIRECTION, 2),
            CommandRequest(GameCommand.TURN_ROAD_VEHICLE, 3),
        ]

    def test_command_for_other_vehicle_type(self, console, ctx):
        result = console("ship all turn")
        assert result.handled
        assert ctx.output.errors == [
            "ERROR: The command you have specified cannot be applied to ship."
        ]
        assert requests(ctx) == []

    def test_no_company(self, console, ctx):
        ctx.world.local_company = None
        result = console("train all count")
        assert result.handled
        assert ctx.output.errors == ["You have to own a company to make use of this command."]

    def test_unknown_local_company(self, console, ctx):
        ctx.world.local_company = 99
        assert console("train all count").matched == 0
        assert len(ctx.output.errors) == 1


class TestInfo:
    def test_train_info(self, console, ctx):
        console("train age<5 info")
        assert ctx.output.texts() == [
            "#   1, Location: [10, 20, 3]",
            "      Age: 1/30 years",
            "      Speed: 100/120 km/h, Orders: 4",
            "      Length: 3 tiles, Power: 1000 hp,  Weight: 200 t",
            "      Service interval: 150 days/%, Breakdowns: 0 (reliability 99%)",
            "Number of trains matched: 1, affected: 1",
        ]

    def test_road_vehicle_info_halves_speed(self, console, ctx):
        console("road all info")
        lines = ctx.output.texts()
        assert lines[0] == "#   1, Location: [30, 40, 0] (BROKEN)"
        assert lines[2] == "      Speed: 40/48 km/h, Orders: 3"

    def test_aircraft_info_full_speed(self, console, ctx):
        console("aircraft all info")
        assert ctx.output.texts()[2] == "      Speed: 500/600 km/h, Orders: 2"

    def test_status_tags(self, console, ctx):
        console("train 2 info")
        assert ctx.output.texts()[0] == "#   2, Location: [0, 0, 0] (STOPPED) (IN DEPOT)"
        console("ship all info")
        assert "#   1, Location: [0, 0, 0] (CRASHED)" in ctx.output.texts()

    def test_wagon_info(self, console, ctx):
        console("train 1 winfo")
        assert ctx.output.texts()[:5] == [
            "Train #   1 wagons",
            " 1,  Cargo capacity: 0 (passengers),  Max speed: 160 km/h  (engine)",
            " 2,  Cargo capacity: 30 (coal),  Max speed: 120 km/h ",
            " 3,  Cargo capacity: 30 (coal),  Max speed: 120 km/h ",
            " 4,  Cargo capacity: 30 (coal),  Max speed: 120 km/h ",
        ]

    def test_wagon_info_is_train_only(self, console, ctx):
        assert console("vehicle all winfo").affected == 2
        console("road all winfo")
        assert ctx.output.errors == [
            "ERROR: The command you have specified cannot be applied to road vehicle."
        ]


class TestViewCommands:
    def test_open(self, console, ctx):
        console("train 1 open")
        assert ctx.viewport.windows == [("vehicle", 1)]

    def test_show_alias(self, console, ctx):
        console("road all show")
        assert ctx.viewport.windows == [("vehicle", 3)]

    def test_center(self, console, ctx):
        console("road all centre")
        assert ctx.viewport.scrolls == [(30, 40)]


class TestServiceInterval:
    def test_change(self, console, ctx):
        assert console("train 1 interval 200").affected == 1
        assert requests(ctx) == [CommandRequest(GameCommand.CHANGE_SERVICE_INTERVAL, 1, 200)]

    def test_clamped_to_days(self, console, ctx):
        console("train 1 interval 5000")
        console("train 1 interval 10")
        assert [r.p1 for r in requests(ctx)] == [800, 30]

    def test_unchanged_is_no_op(self, console, ctx):
        assert console("train 1 interval 150").affected == 0
        assert requests(ctx) == []

    def test_malformed(self, console, ctx):
        assert console("train 1 interval abc").affected == 0
        assert requests(ctx) == []

    def test_missing_parameter(self, console, ctx):
        result = console("train all interval")
        assert result.handled
        assert ctx.output.errors == ["This command requires additional parameter(s)."]

    def test_percent_bounds(self, ctx):
        assert clamp_service_interval(ctx, 200, RIVAL) == 90
        assert clamp_service_interval(ctx, 1, RIVAL) == 5
        assert clamp_service_interval(ctx, 1, LOCAL) == 30


class TestSkipOrders:
    def test_default_skips_one(self, console, ctx):
        console("train 1 skip")
        assert requests(ctx) == [CommandRequest(GameCommand.SKIP_TO_ORDER, 1, 2)]

    @pytest.mark.parametrize(
        "offset, expected",
        [("3", 0), ("2", 3), ("-1", 0), ("-2", 3), ("-6", 3), ("abc", 2), ("5", 2)],
    )
    def test_offsets(self, console, ctx, offset, expected):
        console(f"train 1 skip {offset}")
        assert requests(ctx) == [CommandRequest(GameCommand.SKIP_TO_ORDER, 1, expected)]

    def test_zero_is_no_op(self, console, ctx):
        assert console("train 1 skip 0").affected == 0
        assert requests(ctx) == []

    def test_random(self, console, ctx):
        console("train 1 skip r")
        (request,) = requests(ctx)
        assert request.command == GameCommand.SKIP_TO_ORDER
        assert 0 <= request.p1 < 4

    def test_no_orders(self, console, ctx):
        ctx.world.vehicles[1].num_orders = 0
        assert console("train 1 skip").affected == 0

    def test_leave_only_while_loading(self, console, ctx):
        assert console("train 1 leave").affected == 0
        assert console("road all leave").affected == 1
        assert requests(ctx) == [CommandRequest(GameCommand.SKIP_TO_ORDER, 3, 0)]


class TestDepotOrders:
    def test_not_heading_to_depot(self, console, ctx):
        assert console("train 1 depot").affected == 1
        assert console("train 1 service").affected == 1
        assert console("train 1 undepot").affected == 0
        assert console("train 1 unservice").affected == 0
        assert requests(ctx) == [
            CommandRequest(GameCommand.SEND_TO_DEPOT, 1, 0),
            CommandRequest(GameCommand.SEND_TO_DEPOT, 1, 1),
        ]

    def test_already_parked(self, console, ctx):
        for command in ("depot", "service", "undepot", "unservice"):
            assert console(f"train 2 {command}").affected == 0
        assert requests(ctx) == []

    def test_heading_to_depot_to_stop(self, console, ctx):
        ctx.world.vehicles[1].current_order = Order(OrderType.GOTO_DEPOT, halt_in_depot=True)
        assert console("train 1 depot").affected == 0
        assert console("train 1 unservice").affected == 0
        assert console("train 1 undepot").affected == 1
        assert console("train 1 service").affected == 1

    def test_heading_to_depot_for_service(self, console, ctx):
        ctx.world.vehicles[1].current_order = Order(OrderType.GOTO_DEPOT, halt_in_depot=False)
        assert console("train 1 service").affected == 0
        assert console("train 1 undepot").affected == 0
        assert console("train 1 depot").affected == 1
        assert console("train 1 unservice").affected == 1

    def test_crashed_vehicle_is_skipped(self, console, ctx):
        result = console("ship all depot")
        assert (result.matched, result.affected) == (1, 0)


class TestCloneAndSell:
    def test_clone_needs_depot(self, console, ctx):
        result = console("train all clone 3")
        assert (result.matched, result.affected) == (2, 1)
        assert requests(ctx) == [CommandRequest(GameCommand.CLONE_VEHICLE, 2, 0)] * 3

    def test_clone_shared(self, console, ctx):
        console("train 2 clone_shared")
        assert requests(ctx) == [CommandRequest(GameCommand.CLONE_VEHICLE, 2, 1)]

    def test_malformed_clone_count(self, console, ctx):
        console("train 2 clone abc")
        assert len(requests(ctx)) == 1

    def test_clone_count_is_capped(self, console, ctx):
        ctx.config.max_clones = 5
        assert console("train 2 clone 0x7fffffff").affected == 1
        assert len(requests(ctx)) == 5

    @pytest.fixture
    def parked_train(self, ctx):
        train = ctx.world.vehicles[1]
        train.stopped = True
        train.in_depot = True
        return train

    def test_sell_one_wagon(self, console, ctx, parked_train):
        assert console("train 1 wsell 1").affected == 1
        assert requests(ctx) == [CommandRequest(GameCommand.SELL_VEHICLE, 101)]

    def test_sell_wagon_range_skips_articulated_parts(self, console, ctx, parked_train):
        console("train 1 wsell 1 2")
        assert [r.target for r in requests(ctx)] == [101, 103]

    def test_range_past_end(self, console, ctx, parked_train):
        console("train 1 wsell 2 9")
        assert [r.target for r in requests(ctx)] == [103]

    def test_reversed_range(self, console, ctx, parked_train):
        assert console("train 1 wsell 2 1").affected == 0
        assert requests(ctx) == []

    def test_malformed_index(self, console, ctx, parked_train):
        assert console("train 1 wsell abc").affected == 0

    def test_batch_limit(self, console, ctx, parked_train):
        ctx.config.wagon_batch = 1
        console("train 1 wsell 0 2")
        assert [r.target for r in requests(ctx)] == [1]

    def test_wagon_sell_needs_parked_train(self, console, ctx):
        result = console("train 1 wsell 1")
        assert (result.matched, result.affected) == (1, 0)


class TestAppliedToWorld:
    """Commands observed through a gateway that applies them."""

    def test_stop_then_start(self, live_console, world):
        live_console("train 1 stop")
        assert world.vehicles[1].stopped
        live_console("train 1 start")
        assert not world.vehicles[1].stopped

    def test_sell_removes_vehicle(self, live_console, world):
        result = live_console("train all sell")
        assert result.affected == 1
        assert 2 not in world.vehicles
        assert live_console("train all count").matched == 1

    def test_clone_adds_stopped_vehicles(self, live_console, world):
        live_console("train 2 clone 2")
        assert live_console("train depot count").matched == 3

    def test_depot_order_then_cancel(self, live_console, world):
        live_console("train 1 depot")
        assert world.vehicles[1].current_order == Order(OrderType.GOTO_DEPOT, halt_in_depot=True)
        live_console("train 1 undepot")
        assert world.vehicles[1].current_order.type == OrderType.NOTHING

    def test_wagon_sell_removes_parts(self, live_console, world):
        world.vehicles[1].stopped = True
        world.vehicles[1].in_depot = True
        live_console("train 1 wsell 1 2")
        assert [p.id for p in world.vehicles[1].parts] == [1]
