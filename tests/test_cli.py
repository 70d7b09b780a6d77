import pytest
from pydantic import ValidationError

from listing_rank import cli
from listing_rank.rank import RankResult

PAGE = """
<div data-component-type="s-search-result">
  <div class="s-card-container">
    <a href="/dp/B001">Speaker</a>
    <span>$49.99 </span><span>4.70 out of 5 stars </span>
    <span>FREE delivery Wed, Aug 9</span>
  </div>
</div>
"""


def test_cli_prints_best(tmp_path, capsys):
    page = tmp_path / "page.html"
    page.write_text(PAGE, encoding="utf-8")

    code = cli.main([str(page), "--origin", "https://www.amazon.com"])
    out = capsys.readouterr().out

    assert code == 0
    assert "Best ranked:" in out
    assert "delivery=709" in out
    assert "URL: https://www.amazon.com/dp/B001" in out


def test_cli_no_matches(tmp_path, capsys):
    page = tmp_path / "page.html"
    page.write_text("<html><body></body></html>", encoding="utf-8")

    assert cli.main([str(page)]) == 1
    assert "<none>" in capsys.readouterr().out


def test_cli_bad_origin_fails_before_reading(tmp_path):
    with pytest.raises(ValidationError):
        cli.main([str(tmp_path / "missing.html"), "--origin", "nowhere"])


def test_cli_no_debug_overrides_env_default(tmp_path, monkeypatch):
    page = tmp_path / "page.html"
    page.write_text(PAGE, encoding="utf-8")
    monkeypatch.setattr(cli.config, "DEBUG", True)

    seen = []

    def fake_rank(listings, settings):
        seen.append(settings.debug)
        return RankResult(best=None)

    monkeypatch.setattr(cli, "rank_listings", fake_rank)

    cli.main([str(page)])
    cli.main([str(page), "--no-debug"])
    assert seen == [True, False]
