"""
Property-based tests for label normalization helpers.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from tld_data.labels import decode_label, diff_unordered, duplicates, encode_label, unique_in_order

UNICODE_LABELS = ["한국", "москва", "موقع", "中国", "онлайн", "рф", "קום", "ไทย"]


@st.composite
def label_strategy(draw) -> str:
    return draw(st.one_of(
        st.text(alphabet=st.sampled_from("abcdefghijklmnopqrstuvwxyz0123456789"), min_size=2, max_size=10),
        st.sampled_from(UNICODE_LABELS),
    ))


class TestPunycode:

    def test_known_labels(self) -> None:
        assert decode_label("xn--3e0b707e") == "한국"
        assert decode_label("xn--80adxhks") == "москва"
        assert encode_label("москва") == "xn--80adxhks"
        assert encode_label("com") == "com"

    def test_non_ace_labels_unchanged(self) -> None:
        assert decode_label("com") == "com"
        assert decode_label("dummytld1") == "dummytld1"

    @given(label=label_strategy())
    @settings(max_examples=100)
    def test_encoded_labels_are_ascii_and_decode_back(self, label: str) -> None:
        """
        *For any* label, its URL form SHALL be ASCII and decoding it SHALL give
        back the label shown in the dataset.
        """
        encoded = encode_label(label)

        assert encoded.isascii()
        assert decode_label(encoded) == label


class TestSequenceHelpers:

    @given(items=st.lists(label_strategy(), max_size=30))
    @settings(max_examples=100)
    def test_unique_in_order(self, items: list[str]) -> None:
        result = unique_in_order(items)

        assert len(result) == len(set(items))
        assert set(result) == set(items)
        assert result == sorted(result, key=items.index)

    @given(items=st.lists(label_strategy(), max_size=30))
    @settings(max_examples=100)
    def test_duplicates(self, items: list[str]) -> None:
        repeated = duplicates(items)

        assert set(repeated) == {item for item in items if items.count(item) > 1}
        assert len(repeated) == len(set(repeated))

    def test_diff_unordered(self) -> None:
        added, missing = diff_unordered(["com", "retired", "net"], ["net", "com", "newtld"])

        assert added == ["retired"]
        assert missing == ["newtld"]
