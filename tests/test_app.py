"""Tests for GridApp -- the interactive loop driving a GridView.

The VirtualTerminal scripts key presses; once its script runs out it
answers ``q`` so every run terminates.
"""

from __future__ import annotations

import pytest

from pi.grid.app import KEY_CTRL_C, KEY_CTRL_L, KEY_CTRL_Q, KEY_CTRL_R, GridApp
from pi.grid.config import GridConfig
from pi.grid.table import Table
from pi.grid.terminal import Size
from pi.grid.view import GridView

from .virtual_terminal import VirtualTerminal


def _make_app(
    path=None,
    width: int = 9,
    height: int = 5,
    rows: list[list[str]] | None = None,
) -> tuple[GridApp, GridView, VirtualTerminal]:
    term = VirtualTerminal(width=width, height=height)
    view = GridView(term, GridConfig(cell_width=3), Table.from_rows(rows or []))
    return GridApp(term, view, path=path), view, term


class TestRunLifecycle:
    def test_starts_and_stops_terminal(self) -> None:
        app, _, term = _make_app()
        app.run()
        assert term.started is True
        assert term.stopped is True

    def test_stops_terminal_when_loop_raises(self) -> None:
        app, view, term = _make_app()

        def boom() -> None:
            raise RuntimeError("boom")

        view.render = boom  # type: ignore[method-assign]
        with pytest.raises(RuntimeError):
            app.run()
        assert term.stopped is True

    def test_loads_file_and_draws_it(self, tmp_path) -> None:
        path = tmp_path / "data.csv"
        path.write_text("a,bb\nccc\n", encoding="utf-8")
        app, view, term = _make_app(path=path)
        app.run()
        assert term.lines() == [
            "─────────",
            "│  a│ bb│   ",
            "─────────",
            "│ccc│   │   ",
            "─────────",
        ]
        assert view.redraw_count == 1

    def test_missing_file_shows_empty_grid(self, tmp_path) -> None:
        app, view, term = _make_app(path=tmp_path / "missing.csv")
        app.run()
        assert view.table.is_empty()
        assert term.lines()[1] == "│   │   │   "

    def test_idle_passes_do_not_redraw(self) -> None:
        app, view, term = _make_app()
        term.feed_keys([None, None, None])
        app.run()
        assert view.redraw_count == 1
        assert term.flush_count == 4

    def test_viewport_taken_from_terminal_on_start(self) -> None:
        app, view, term = _make_app()
        term.simulate_resize(12, 3)
        term.take_resize()
        app.run()
        assert view.size == Size(12, 3)


class TestKeys:
    def test_q_quits(self) -> None:
        app, _, term = _make_app()
        term.feed_keys(["q"])
        app.run()
        assert app.should_quit is True

    def test_ctrl_keys_quit(self) -> None:
        for key in (KEY_CTRL_C, KEY_CTRL_Q):
            app, _, _ = _make_app()
            app.handle_key(key)
            assert app.should_quit is True

    def test_other_keys_are_ignored(self) -> None:
        app, view, _ = _make_app()
        view.render()
        app.handle_keys("xyz")
        assert app.should_quit is False
        assert view.needs_redraw is False

    def test_keys_after_quit_are_not_handled(self) -> None:
        app, view, _ = _make_app()
        view.render()
        app.handle_keys("q" + KEY_CTRL_L)
        assert app.should_quit is True
        assert view.needs_redraw is False

    def test_ctrl_l_forces_redraw(self) -> None:
        app, view, term = _make_app()
        term.feed_keys([KEY_CTRL_L])
        app.run()
        assert view.redraw_count == 2

    def test_ctrl_r_reloads_file(self, tmp_path) -> None:
        path = tmp_path / "data.csv"
        path.write_text("old\n", encoding="utf-8")
        app, view, _ = _make_app(path=path)
        view.load(path)
        path.write_text("new\n", encoding="utf-8")
        app.handle_key(KEY_CTRL_R)
        assert view.table.records == (("new",),)

    def test_reload_without_path(self) -> None:
        app, _, _ = _make_app()
        assert app.reload() is False

    def test_failed_reload_keeps_table(self, tmp_path) -> None:
        path = tmp_path / "data.csv"
        path.write_text("kept\n", encoding="utf-8")
        app, view, _ = _make_app(path=path)
        view.load(path)
        path.unlink()
        assert app.reload() is False
        assert view.table.records == (("kept",),)


class TestResize:
    def test_resize_applied_before_next_frame(self) -> None:
        app, view, term = _make_app()
        term.simulate_resize(12, 3)
        term.feed_keys([None])
        app.run()
        assert view.size == Size(12, 3)
        # Initial frame plus the redraw caused by the pending resize flag.
        assert view.redraw_count == 2
        assert term.screen[0] == "─" * 12


class TestRefresh:
    def test_draw_error_is_logged_and_retried(self, caplog) -> None:
        app, view, term = _make_app()
        term.fail_on_row = 2
        app.refresh()
        assert view.needs_redraw is True
        assert "frame aborted at row 2" in caplog.text

        term.heal()
        app.refresh()
        assert view.needs_redraw is False
        assert view.redraw_count == 1

    def test_persistent_draw_error_does_not_stop_loop(self) -> None:
        app, view, term = _make_app()
        term.fail_on_row = 0
        term.feed_keys([None, None])
        app.run()
        assert term.stopped is True
        assert view.redraw_count == 0

    def test_flush_failure_invalidates_view(self) -> None:
        app, view, term = _make_app()
        term.fail_flush = True
        app.refresh()
        assert view.needs_redraw is True

        term.fail_flush = False
        app.refresh()
        assert view.needs_redraw is False
        assert view.redraw_count == 2
