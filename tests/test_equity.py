"""Tests for the Monte Carlo equity engine."""

import pytest

import coach.game.equity as equity_module
from coach.game.cards import full_deck, parse_cards, remove_used
from coach.game.equity import (
    CancelToken, EngineConfig, EquityEngine, EquityRequest, EquityResult,
    Seat, SimResult, calculate_equity,
)
from coach.game.ranges import RangeStyle, in_range
from coach.game.rng import RandomSource


def request(hero, board="", styles=("any",), trials=600, seed=42):
    return EquityRequest(
        hero=parse_cards(hero),
        board=parse_cards(board),
        opponents=[Seat(id=i + 2, range=RangeStyle(s)) for i, s in enumerate(styles)],
        trials=trials,
        seed=seed,
    )


class TestShortCircuits:
    def test_no_opponents(self, engine):
        result = engine.run(request("As Kd", styles=()))
        assert result.equity == 1.0
        assert result.trials == 0
        assert result.done

    def test_inactive_opponents_ignored(self, engine):
        req = request("As Kd", styles=())
        req.opponents = [Seat(id=2, active=False), Seat(id=3, active=False)]
        result = engine.run(req)
        assert result.equity == 1.0
        assert result.done

    def test_hero_not_ready(self, engine):
        calls = []
        result = engine.run(request(""), progress=lambda c, t: calls.append(c))
        assert not result.ready
        assert not result.done
        assert result.trials == 0
        assert calls == []

    def test_one_card_hero_not_ready(self, engine):
        result = engine.run(request("As", trials=300, seed=1))
        assert result.ready is False
        assert not result.done
        assert result.trials == 0

    def test_not_ready_skips_capacity_check(self, engine):
        result = engine.run(request("As", styles=["any"] * 24))
        assert result.ready is False

    def test_no_trials_skips_capacity_check(self, engine):
        result = engine.run(request("As Kd", styles=["any"] * 24, trials=0))
        assert result.done
        assert result.trials == 0
        assert result.equity == 0.0

    @pytest.mark.parametrize("trials", [0, -10])
    def test_no_trials(self, engine, trials):
        result = engine.run(request("As Kd", trials=trials))
        assert result.equity == 0.0
        assert result.trials == 0
        assert result.done


class TestValidation:
    def test_duplicate_cards(self, engine):
        with pytest.raises(ValueError, match="Duplicate"):
            engine.run(request("As Kd", board="As 7d 2c"))

    def test_three_card_hero(self, engine):
        with pytest.raises(ValueError, match="at most 2"):
            engine.run(request("As Kd Qh"))

    def test_board_too_long(self, engine):
        with pytest.raises(ValueError):
            engine.run(request("As Kd", board="2c 3c 4c 5c 6c 7c"))

    def test_too_many_opponents(self, engine):
        with pytest.raises(ValueError, match="Not enough cards"):
            engine.run(request("As Kd", styles=["any"] * 23))

    def test_from_codes(self):
        req = EquityRequest.from_codes(["As", "Kd"], ["2c", "7h", "9s"], ["tight", "maniac"], 100, 3)
        assert [str(c) for c in req.hero] == ["As", "Kd"]
        assert [s.id for s in req.opponents] == [2, 3]
        assert req.opponents[1].range is RangeStyle.MANIAC
        assert req.seed == 3

    def test_from_codes_style_names_case_insensitive(self):
        req = EquityRequest.from_codes(["As", "Kd"], styles=["Tight", " REG "])
        assert [s.range for s in req.opponents] == [RangeStyle.TIGHT, RangeStyle.REG]

    def test_from_codes_unknown_style(self):
        with pytest.raises(ValueError, match="Unknown range style"):
            EquityRequest.from_codes(["As", "Kd"], styles=["nit"])


class TestSimulation:
    def test_seeded_runs_reproduce(self, engine, board_flop):
        req = request("Qh Jh", styles=("tight", "maniac"))
        req.board = board_flop
        first = engine.run(req)
        second = engine.run(req)
        assert (first.wins, first.ties, first.losses) == (second.wins, second.ties, second.losses)
        assert first.equity == second.equity

    def test_different_seeds_differ(self, engine):
        a = engine.run(request("Qh Jh", styles=("reg",), seed=1))
        b = engine.run(request("Qh Jh", styles=("reg",), seed=2))
        assert (a.wins, a.losses) != (b.wins, b.losses)

    def test_trial_accounting(self, engine):
        result = engine.run(request("7h 7c", board="Ks 7d 2c", styles=("loose", "reg", "any")))
        assert result.trials == 600
        assert result.wins + result.tied_trials + result.losses == result.trials
        assert 0.0 <= result.equity <= 1.0
        assert result.done
        assert not result.cancelled

    def test_unbeatable_hand(self, engine):
        # Hero holds the royal; nobody can match it
        result = engine.run(request("As 3c", board="Ts Js Qs Ks 2d", styles=("any", "any")))
        assert result.equity == 1.0
        assert result.wins == result.trials == 600

    def test_board_plays_for_everyone(self, engine):
        # Royal on board: every trial is a three-way split
        result = engine.run(request("2c 3d", board="Ts Js Qs Ks As", styles=("any", "any")))
        assert result.wins == 0
        assert result.losses == 0
        assert result.tied_trials == 600
        assert result.ties == pytest.approx(600 / 3)
        assert result.equity == pytest.approx(1.0)

    def test_aces_vs_tight(self, engine):
        result = engine.run(request("Ah Ad", styles=("tight",)))
        assert result.equity > 0.65

    def test_more_opponents_less_equity(self, engine):
        heads_up = engine.run(request("As Kd", trials=1000))
        multiway = engine.run(request("As Kd", styles=("any",) * 3, trials=1000))
        assert multiway.equity < heads_up.equity

    def test_river_board(self, engine, board_river):
        req = EquityRequest(
            hero=parse_cards("Kd Kh"),
            board=board_river,
            opponents=[Seat(id=2, range=RangeStyle.REG)],
            trials=300,
            seed=9,
        )
        # Top set on a dry river
        assert engine.run(req).equity > 0.9

    def test_no_card_dealt_twice(self, engine, monkeypatch):
        hero = parse_cards("Ah Kh")
        state = {"used": set(), "board": None}
        real_best_of_7 = equity_module.best_of_7

        def checking(cards):
            assert len(set(cards)) == len(cards) == 7
            if cards[:2] == hero:
                state["used"] = set(cards)
                state["board"] = cards[2:]
            else:
                hole = set(cards[:2])
                assert cards[2:] == state["board"]
                assert not hole & state["used"]
                state["used"] |= hole
            return real_best_of_7(cards)

        monkeypatch.setattr(equity_module, "best_of_7", checking)
        req = EquityRequest(
            hero=hero,
            board=parse_cards("Qh 7d"),
            opponents=[Seat(id=i, range=RangeStyle.MANIAC) for i in range(2, 7)],
            trials=300,
            seed=5,
        )
        assert engine.run(req).trials == 300


class TestProgressAndCancel:
    def test_progress_per_batch(self, engine):
        seen = []
        engine.run(request("As Kd", trials=1000), progress=lambda c, t: seen.append((c, t)))
        assert seen == [(300, 1000), (600, 1000), (900, 1000), (1000, 1000)]

    def test_cancel_keeps_partial_counts(self, small_batch_engine):
        token = CancelToken()
        calls = []

        def on_progress(completed, total):
            calls.append(completed)
            if len(calls) == 3:
                token.cancel()

        result = small_batch_engine.run(request("As Kd", trials=1000), on_progress, token)
        assert result.trials == 300
        assert result.cancelled
        assert not result.done
        assert result.wins + result.tied_trials + result.losses == 300
        assert calls == [100, 200, 300]

    def test_cancel_before_start(self, engine):
        token = CancelToken()
        token.cancel()
        result = engine.run(request("As Kd"), cancel=token)
        assert result.cancelled
        assert result.trials == 0
        assert result.equity == 0.0

    def test_token_reset(self):
        token = CancelToken()
        token.cancel()
        assert token.cancelled
        token.reset()
        assert not token.cancelled

    def test_iter_batches_snapshots(self, small_batch_engine):
        snapshots = list(small_batch_engine.iter_batches(request("As Kd", trials=250)))
        assert [s.trials for s in snapshots] == [100, 200, 250]
        assert [s.done for s in snapshots] == [False, False, True]
        assert snapshots[-1].progress == 1.0


class TestRangeDealing:
    def test_respects_range(self, engine):
        pool = remove_used(full_deck(), parse_cards("As Kd"))
        rng = RandomSource(21)
        tally = SimResult()
        for _ in range(200):
            a, b = engine.deal_from_range(pool, RangeStyle.TIGHT, rng, tally)
            assert a != b
            assert a in pool and b in pool
            assert in_range(RangeStyle.TIGHT, a, b)
        assert tally.fallbacks == 0

    def test_falls_back_to_random_pair(self):
        engine = EquityEngine(EngineConfig(max_range_tries=0))
        pool = full_deck()
        tally = SimResult()
        a, b = engine.deal_from_range(pool, RangeStyle.TIGHT, RandomSource(4), tally)
        assert a != b
        assert tally.fallbacks == 1
        assert tally.trials == 0

    def test_fallback_counted_during_run(self):
        engine = EquityEngine(EngineConfig(max_range_tries=0, batch_size=50))
        result = engine.run(request("As Kd", styles=("tight",), trials=100))
        assert result.done
        assert result.fallbacks == 100

    def test_fallbacks_kept_per_run(self):
        engine = EquityEngine(EngineConfig(max_range_tries=0, batch_size=50))
        heads_up = engine.iter_batches(request("As Kd", styles=("tight",), trials=100))
        three_way = engine.iter_batches(request("Qh Jh", styles=("reg",) * 2, trials=100))
        # Interleave two runs on the same engine
        first, second = [], []
        for a, b in zip(heads_up, three_way):
            first.append(a)
            second.append(b)
        assert [r.fallbacks for r in first] == [50, 100]
        assert [r.fallbacks for r in second] == [100, 200]


class TestResults:
    def test_sim_result_record(self):
        sim = SimResult()
        sim.record(0, lost=False)
        sim.record(1, lost=False)
        sim.record(2, lost=True)
        assert (sim.wins, sim.losses, sim.tied_trials) == (1, 1, 1)
        assert sim.ties == pytest.approx(0.5)
        assert sim.trials == 3
        assert sim.equity == pytest.approx(1.5 / 2.5)

    def test_empty_sim_equity(self):
        assert SimResult().equity == 0.0

    def test_merge(self):
        a = SimResult(wins=2, ties=0.5, losses=1, tied_trials=1)
        a.merge(SimResult(wins=1, losses=3))
        assert (a.wins, a.ties, a.losses, a.tied_trials) == (3, 0.5, 4, 1)

    def test_std_error(self):
        result = EquityResult(equity=0.5, trials=100, total=100, done=True)
        assert result.std_error == pytest.approx(0.05)
        assert EquityResult().std_error == 0.0

    def test_progress_fraction(self):
        assert EquityResult(trials=250, total=1000).progress == 0.25


class TestCalculateEquity:
    def test_seeded(self):
        a = calculate_equity(["Ah", "Ad"], styles=["reg"], num_simulations=400, seed=8)
        b = calculate_equity(["Ah", "Ad"], styles=["reg"], num_simulations=400, seed=8)
        assert a == b
        assert a > 0.7

    def test_no_opponents(self):
        assert calculate_equity(["2c", "7d"], styles=[]) == 1.0
