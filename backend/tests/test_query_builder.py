"""Tests for list-view query building, debounce and ListView state."""

import asyncio
import logging

import pytest

from partymap_admin.exceptions import InvalidPatch
from partymap_admin.services.list_view import ListView
from partymap_admin.services.query_builder import (
    QueryFilter,
    apply_filter_patch,
    apply_pagination,
    to_request_params,
)
from partymap_admin.utils.debounce import debounce


class TestApplyFilterPatch:

    @pytest.mark.unit
    def test_search_change_resets_page(self):
        current = QueryFilter(page=3, limit=10)
        updated = apply_filter_patch(current, {"search": "ber"})
        assert updated.page == 1
        assert updated.search == "ber"
        assert updated.limit == 10

    @pytest.mark.unit
    def test_page_only_patch_keeps_page(self):
        updated = apply_filter_patch(QueryFilter(page=2), {"page": 4})
        assert updated.page == 4

    @pytest.mark.unit
    def test_limit_only_patch_keeps_page(self):
        updated = apply_filter_patch(QueryFilter(page=2), {"limit": 50})
        assert updated.page == 2
        assert updated.limit == 50

    @pytest.mark.unit
    def test_page_mixed_with_other_keys_resets(self):
        updated = apply_filter_patch(QueryFilter(page=2), {"page": 5, "search": "x"})
        assert updated.page == 1

    @pytest.mark.unit
    def test_input_not_mutated(self):
        current = QueryFilter(page=3, search="a")
        apply_filter_patch(current, {"search": "b"})
        assert current.page == 3
        assert current.search == "a"

    @pytest.mark.unit
    def test_empty_patch_is_noop(self):
        current = QueryFilter(page=3)
        assert apply_filter_patch(current, {}) is current

    @pytest.mark.unit
    def test_chip_keys_are_kept(self):
        updated = apply_filter_patch(QueryFilter(), {"markerType": "bar"})
        assert updated.to_wire()["markerType"] == "bar"

    @pytest.mark.unit
    def test_python_names_accepted(self):
        updated = apply_filter_patch(QueryFilter(), {"sort_by": "createdAt", "is_archive": True})
        assert updated.sort_by == "createdAt"
        assert updated.is_archive is True
        assert to_request_params(updated)["sortBy"] == "createdAt"

    @pytest.mark.unit
    @pytest.mark.parametrize("patch", [None, "search=x", ["search", "x"]])
    def test_non_mapping_patch(self, patch):
        with pytest.raises(InvalidPatch):
            apply_filter_patch(QueryFilter(), patch)

    @pytest.mark.unit
    @pytest.mark.parametrize("patch", [{"page": 0}, {"limit": 0}, {"limit": -5}])
    def test_out_of_range_values(self, patch):
        with pytest.raises(InvalidPatch):
            apply_filter_patch(QueryFilter(), patch)


class TestApplyPagination:

    @pytest.mark.unit
    def test_sets_page_and_limit_only(self):
        current = QueryFilter(search="club", page=1, limit=10)
        updated = apply_pagination(current, 3, 25)
        assert (updated.page, updated.limit, updated.search) == (3, 25, "club")

    @pytest.mark.unit
    def test_rejects_page_zero(self):
        with pytest.raises(InvalidPatch):
            apply_pagination(QueryFilter(), 0, 10)


class TestToRequestParams:

    @pytest.mark.unit
    def test_omits_empty_values(self):
        params = to_request_params(QueryFilter(search="", page=2, limit=20))
        assert params == {"limit": "20", "page": "2"}

    @pytest.mark.unit
    def test_equal_filters_encode_identically(self):
        a = apply_filter_patch(QueryFilter(), {"search": "x", "type": "club"})
        b = apply_filter_patch(QueryFilter(), {"type": "club", "search": "x"})
        assert list(to_request_params(a).items()) == list(to_request_params(b).items())

    @pytest.mark.unit
    def test_bool_and_list_encoding(self):
        query = apply_filter_patch(QueryFilter(), {"isDraft": False, "markerType": ["bar", "club"]})
        params = to_request_params(query)
        assert params["isDraft"] == "false"
        assert params["markerType"] == '["bar","club"]'

    @pytest.mark.unit
    def test_keys_sorted(self):
        query = apply_filter_patch(QueryFilter(), {"status": "active", "search": "a"})
        assert list(to_request_params(query)) == sorted(to_request_params(query))


class TestDebounce:

    @pytest.mark.unit
    def test_burst_fires_once_with_last_args(self, fake_loop):
        calls = []
        search = debounce(calls.append, 500, loop=fake_loop)
        for i, text in enumerate(["b", "be", "ber", "berg", "berli"]):
            if i:
                fake_loop.advance(25)
            search(text)
        fake_loop.advance(499)
        assert calls == []
        fake_loop.advance(1)
        assert calls == ["berli"]
        fake_loop.advance(2000)
        assert calls == ["berli"]

    @pytest.mark.unit
    def test_separate_bursts_fire_separately(self, fake_loop):
        calls = []
        search = debounce(calls.append, 100, loop=fake_loop)
        search("a")
        fake_loop.advance(150)
        search("b")
        fake_loop.advance(150)
        assert calls == ["a", "b"]

    @pytest.mark.unit
    def test_cancel_drops_pending_call(self, fake_loop):
        calls = []
        search = debounce(calls.append, 100, loop=fake_loop)
        search("a")
        assert search.is_pending()
        search.cancel()
        assert not search.is_pending()
        fake_loop.advance(500)
        assert calls == []

        search("b")
        fake_loop.advance(100)
        assert calls == ["b"]
        assert not search.is_pending()

    @pytest.mark.unit
    def test_only_one_timer_pending(self, fake_loop):
        search = debounce(lambda text: None, 100, loop=fake_loop)
        for text in "abcde":
            search(text)
        assert len(fake_loop.pending) == 1

    @pytest.mark.unit
    def test_negative_delay(self, fake_loop):
        with pytest.raises(ValueError):
            debounce(print, -1, loop=fake_loop)

    @pytest.mark.anyio
    async def test_coroutine_function_on_running_loop(self):
        calls = []

        async def fetch(text):
            calls.append(text)

        search = debounce(fetch, 10)
        search("a")
        search("ab")
        await asyncio.sleep(0.1)
        assert calls == ["ab"]

    @pytest.mark.anyio
    async def test_failing_coroutine_is_logged(self, caplog):
        async def fetch(text):
            raise RuntimeError(f"backend down for {text}")

        search = debounce(fetch, 10)
        with caplog.at_level(logging.ERROR, logger="partymap_admin.utils.debounce"):
            search("ber")
            await asyncio.sleep(0.1)

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "Debounced call to fetch failed" in errors[0].getMessage()
        assert isinstance(errors[0].exc_info[1], RuntimeError)
        assert not search.is_pending()


class TestListView:

    @pytest.mark.unit
    def test_defaults_from_settings(self, fake_loop):
        view = ListView(loop=fake_loop)
        assert view.filter.page == 1
        assert view.filter.limit == 10

    @pytest.mark.unit
    def test_filter_change_clears_selection_and_page(self, fake_loop):
        changes = []
        view = ListView(QueryFilter(page=3), on_change=changes.append, loop=fake_loop)
        view.select(["a", "b"])
        view.apply_filter({"markerType": "club"})
        assert view.selected_ids == []
        assert view.filter.page == 1
        assert changes == [view.filter]

    @pytest.mark.unit
    def test_paginate_clears_selection(self, fake_loop):
        view = ListView(loop=fake_loop)
        view.select(["a"])
        view.paginate(2, 10)
        assert view.selected_ids == []
        assert view.filter.page == 2

    @pytest.mark.unit
    def test_unchanged_filter_skips_callback(self, fake_loop):
        changes = []
        view = ListView(on_change=changes.append, loop=fake_loop)
        view.select(["a"])
        view.paginate(1, 10)
        assert changes == []
        assert view.selected_ids == []

    @pytest.mark.unit
    def test_search_is_debounced(self, fake_loop):
        changes = []
        view = ListView(QueryFilter(page=4), on_change=changes.append, search_delay_ms=500, loop=fake_loop)
        view.search("b")
        fake_loop.advance(100)
        view.search("ber")
        fake_loop.advance(499)
        assert changes == []
        fake_loop.advance(1)
        assert len(changes) == 1
        assert changes[0].search == "ber"
        assert changes[0].page == 1

    @pytest.mark.unit
    def test_close_cancels_pending_search(self, fake_loop):
        changes = []
        view = ListView(on_change=changes.append, loop=fake_loop)
        view.search("ber")
        view.close()
        fake_loop.advance(1000)
        assert changes == []
