import pytest

from vidtube_auth.core.logging import mask_identifier


@pytest.mark.parametrize(
    "value, expected",
    [
        ("alice@x.com", "al***@x.com"),
        ("alice", "al***"),
        ("a", "a*"),
        ("", ""),
        (None, ""),
    ],
)
def test_mask_identifier(value, expected):
    assert mask_identifier(value) == expected
