import pytest

from taxiroute.config import Settings


def test_defaults():
    settings = Settings()
    assert settings.snap_chunk_size == 100
    assert settings.max_segment_m == 15.0
    assert settings.google_maps_api_key == ""


@pytest.mark.parametrize("chunk_size", [0, 1, 101, 500])
def test_chunk_size_outside_roads_api_limits_is_rejected(chunk_size):
    with pytest.raises(ValueError, match="SNAP_CHUNK_SIZE"):
        Settings(snap_chunk_size=chunk_size)


def test_from_env_reads_and_validates(monkeypatch):
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", " abc ")
    monkeypatch.setenv("SNAP_CHUNK_SIZE", "50")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = Settings.from_env()
    assert settings.google_maps_api_key == "abc"
    assert settings.snap_chunk_size == 50
    assert settings.log_level == "DEBUG"

    monkeypatch.setenv("SNAP_CHUNK_SIZE", "150")
    with pytest.raises(ValueError):
        Settings.from_env()


def test_non_positive_segment_length_is_rejected():
    with pytest.raises(ValueError, match="MAX_SEGMENT_M"):
        Settings(max_segment_m=0)
