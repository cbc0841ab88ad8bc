"""Unit tests for the add and stats batch commands."""

import pytest

from shortener.cli.commands import run_add_batch, run_stats_batch


class TestAddBatch:
    """Tests for run_add_batch."""

    @pytest.mark.asyncio
    async def test_plain_url_is_added_without_strid(self, stub_server, make_client, capsys) -> None:
        """Test an argument without `+` is sent whole to /api/add."""
        server = stub_server({"POST /api/add": (200, "42 abc")})
        client = make_client(server)

        report = await run_add_batch(client, ["http://example.com"])

        assert server.paths == ["/api/add"]
        assert server.form() == {"link": ["http://example.com"]}
        assert report.succeeded == 1
        out = capsys.readouterr().out
        assert "http://example.com:" in out
        assert "  - http://test:8080/abc" in out
        assert "  - http://test:8080/.42" in out
        await client.close()

    @pytest.mark.asyncio
    async def test_url_with_strid(self, stub_server, make_client) -> None:
        """Test `A+B` sends url A under string ID B."""
        server = stub_server({"POST /api/add/mylink": (200, "7 mylink")})
        client = make_client(server)

        await run_add_batch(client, ["http://example.com+mylink"])

        assert server.paths == ["/api/add/mylink"]
        assert server.form() == {"link": ["http://example.com"]}
        await client.close()

    @pytest.mark.asyncio
    async def test_invalid_strid_is_skipped_locally(self, stub_server, make_client, capsys) -> None:
        """Test an invalid string ID makes no request and the batch goes on."""
        server = stub_server({"POST /api/add": (200, "1 next")})
        client = make_client(server)

        report = await run_add_batch(client, ["http://example.com+bad id", "http://example.org"])

        assert server.paths == ["/api/add"]
        assert report.invalid == 1
        assert report.succeeded == 1
        assert not report.aborted
        assert "String ID `bad id` invalid" in capsys.readouterr().out
        await client.close()

    @pytest.mark.asyncio
    async def test_strid_with_second_plus_is_invalid(self, stub_server, make_client) -> None:
        """Test only the first `+` separates, so `a+b` as a string ID is rejected locally."""
        server = stub_server()
        client = make_client(server)

        report = await run_add_batch(client, ["http://example.com+a+b"])

        assert server.requests == []
        assert report.invalid == 1
        await client.close()

    @pytest.mark.asyncio
    async def test_empty_strid_is_invalid(self, stub_server, make_client) -> None:
        """Test `url+` is refused locally instead of posting to `/api/add/`."""
        server = stub_server({"POST /api/add": (200, "42 abc")})
        client = make_client(server)

        report = await run_add_batch(client, ["http://example.com+"])

        assert server.requests == []
        assert report.invalid == 1
        assert report.succeeded == 0
        await client.close()

    @pytest.mark.asyncio
    async def test_conflict_continues_batch(self, stub_server, make_client, capsys) -> None:
        """Test a taken string ID is reported and the next argument is processed."""
        server = stub_server({
            "POST /api/add/taken": (409, ""),
            "POST /api/add/free": (200, "8 free"),
        })
        client = make_client(server)

        report = await run_add_batch(
            client, ["http://example.com+taken", "http://example.org+free"],
        )

        assert server.paths == ["/api/add/taken", "/api/add/free"]
        assert report.rejected == 1
        assert report.succeeded == 1
        assert not report.aborted
        assert "String ID `taken` already used" in capsys.readouterr().out
        await client.close()

    @pytest.mark.asyncio
    async def test_too_short_continues_batch(self, stub_server, make_client, capsys) -> None:
        """Test a 414 answer is reported and the batch goes on."""
        server = stub_server({"POST /api/add": (414, "")})
        client = make_client(server)

        report = await run_add_batch(client, ["http://a.b", "http://c.d"])

        assert len(server.requests) == 2
        assert report.rejected == 2
        assert "too short" in capsys.readouterr().out
        await client.close()

    @pytest.mark.asyncio
    async def test_unreachable_stops_batch(self, stub_server, make_client, capsys) -> None:
        """Test the batch stops at the first unreachable answer."""
        server = stub_server(offline=True)
        client = make_client(server)

        report = await run_add_batch(
            client, ["http://example.com", "http://example.org", "http://example.net"],
        )

        assert len(server.requests) == 1
        assert report.aborted
        assert "Offline or http://test:8080 unreachable" in capsys.readouterr().out
        await client.close()

    @pytest.mark.asyncio
    async def test_unreachable_with_strid_stops_batch(self, stub_server, make_client) -> None:
        """Test an unreachable service stops the batch for string ID links too."""
        server = stub_server(offline=True)
        client = make_client(server)

        report = await run_add_batch(
            client, ["http://example.com+one", "http://example.org+two"],
        )

        assert server.paths == ["/api/add/one"]
        assert report.aborted
        await client.close()

    @pytest.mark.asyncio
    async def test_malformed_response_stops_batch(self, stub_server, make_client, capsys) -> None:
        """Test a body missing fields is reported and ends the batch."""
        server = stub_server({"POST /api/add": (200, "42")})
        client = make_client(server)

        report = await run_add_batch(client, ["http://example.com", "http://example.org"])

        assert len(server.requests) == 1
        assert report.aborted
        assert "Malformed response" in capsys.readouterr().out
        await client.close()


class TestStatsBatch:
    """Tests for run_stats_batch."""

    @pytest.mark.asyncio
    async def test_stats_are_displayed(self, stub_server, make_client, capsys) -> None:
        """Test clicks and destination are printed under the short address."""
        server = stub_server({"GET /api/stats/mylink": (200, "7 http://example.com")})
        client = make_client(server)

        report = await run_stats_batch(client, ["mylink"])

        assert report.succeeded == 1
        out = capsys.readouterr().out
        assert "http://test:8080/mylink:" in out
        assert "  - http://example.com" in out
        assert "  - 7 clicks" in out
        await client.close()

    @pytest.mark.asyncio
    async def test_not_found_continues_batch(self, stub_server, make_client, capsys) -> None:
        """Test an unknown string ID is reported and the batch goes on."""
        server = stub_server({
            "GET /api/stats/missing": (404, ""),
            "GET /api/stats/known": (200, "3 http://example.com"),
        })
        client = make_client(server)

        report = await run_stats_batch(client, ["missing", "known"])

        assert server.paths == ["/api/stats/missing", "/api/stats/known"]
        assert report.rejected == 1
        assert report.succeeded == 1
        assert "http://test:8080/missing not found" in capsys.readouterr().out
        await client.close()

    @pytest.mark.asyncio
    async def test_invalid_strid_makes_no_request(self, stub_server, make_client) -> None:
        """Test invalid string IDs are skipped without contacting the service."""
        server = stub_server()
        client = make_client(server)

        report = await run_stats_batch(client, ["no/slash", "no space"])

        assert server.requests == []
        assert report.invalid == 2
        assert not report.aborted
        await client.close()

    @pytest.mark.asyncio
    async def test_unreachable_stops_batch(self, stub_server, make_client) -> None:
        """Test the batch stops at the first unreachable answer."""
        server = stub_server(offline=True)
        client = make_client(server)

        report = await run_stats_batch(client, ["one", "two"])

        assert server.paths == ["/api/stats/one"]
        assert report.aborted
        await client.close()
