"""Tests for value coercion and sparse arrays."""

import pytest

from wiretypes.base import DataType, Member
from wiretypes.coercion import SparseArray, coerce_array, coerce_object, is_empty
from wiretypes.errors import UnknownFieldError
from wiretypes.simple_types import Float, Integer, String


class CurrencyType(DataType):
    code = Member(String)
    amount = Member(Float)


class TestCoerceObject:
    """Tests for coerce_object."""

    def test_instance_is_returned_unchanged(self):
        """Test that an instance of the target type is returned as is."""
        value = String("USD")
        assert coerce_object(value, String) is value

        currency = CurrencyType({"code": "USD"})
        assert coerce_object(currency, CurrencyType) is currency

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_values_become_none(self, value):
        """Test that None and the empty string become None."""
        assert coerce_object(value, String) is None
        assert coerce_object(value, CurrencyType) is None

    def test_constructs_leaf_type(self):
        """Test conversion to a leaf type."""
        result = coerce_object("55", Integer)
        assert result == 55
        assert isinstance(result, Integer)

    def test_constructs_declared_type_from_mapping(self):
        """Test conversion of a mapping to a declared type."""
        result = coerce_object({"code": "USD", "amount": "5.5"}, CurrencyType)
        assert isinstance(result, CurrencyType)
        assert result.code == "USD"
        assert result.amount == 5.5

    def test_constructor_errors_propagate(self):
        """Test that constructor errors are not caught."""
        with pytest.raises(ValueError):
            coerce_object("abc", Integer)

    def test_is_empty(self):
        """Test which values count as empty."""
        assert is_empty(None)
        assert is_empty("")
        assert not is_empty(0)
        assert not is_empty(False)
        assert not is_empty({})


class TestSparseArray:
    """Tests for SparseArray without conversion."""

    def test_set_past_end_fills_gap(self):
        """Test that writing past the end fills the gap with defaults."""
        array = SparseArray()
        array[2] = "x"
        assert list(array) == [None, None, "x"]

    def test_read_past_end_grows_array(self):
        """Test that reading past the end stores the default."""
        array = SparseArray()
        assert array[1] is None
        assert len(array) == 2

    def test_negative_index_out_of_range(self):
        """Test a negative index past the start."""
        array = SparseArray()
        array.append("a")
        assert array[-1] == "a"
        with pytest.raises(IndexError):
            array[-5]

    def test_slices(self):
        """Test slice reads and writes."""
        array = SparseArray()
        array.extend(["a", "b", "c"])
        assert array[1:] == ["b", "c"]
        array[0:2] = ["x", "y"]
        assert list(array) == ["x", "y", "c"]


class TestSparseArrayConversion:
    """Tests for SparseArray with a converter."""

    @pytest.fixture
    def integers(self):
        return SparseArray(lambda value: coerce_object(value, Integer))

    def test_setitem_converts(self, integers):
        """Test that item assignment converts values."""
        integers[0] = "7"
        assert isinstance(integers[0], Integer)

    def test_append_extend_insert_convert(self, integers):
        """Test that append, extend and insert convert values."""
        integers.append("1")
        integers.extend(["2", "3"])
        integers.insert(0, "0")
        integers += ["4"]
        assert integers == [0, 1, 2, 3, 4]
        assert all(isinstance(item, Integer) for item in integers)

    def test_merge_list(self, integers):
        """Test merging a list by position."""
        assert integers.merge(["1", "2"]) == [1, 2]

    def test_merge_numeric_mapping(self, integers):
        """Test merging a mapping of numeric keys."""
        integers.merge({"1": "10", "3": "30"})
        assert list(integers) == [None, 10, None, 30]

    def test_merge_bare_value(self, integers):
        """Test that a bare value is merged at index 0."""
        integers.merge("5")
        assert list(integers) == [5]

    def test_merge_returns_self(self, integers):
        """Test that merge returns the array."""
        assert integers.merge([]) is integers


class TestCoerceArray:
    """Tests for coerce_array."""

    def test_sparse_leaf_mapping(self):
        """Test a sparse mapping of leaf values."""
        result = coerce_array({"2": "x"}, String)
        assert isinstance(result, SparseArray)
        assert list(result) == [None, None, "x"]
        assert isinstance(result[2], String)

    def test_sparse_composite_mapping_fills_with_empty_instances(self):
        """Test that composite gaps are filled with empty instances."""
        result = coerce_array({"2": {"code": "EUR"}}, CurrencyType)
        assert len(result) == 3
        assert isinstance(result[0], CurrencyType)
        assert isinstance(result[1], CurrencyType)
        assert result[0].to_hash() == {}
        assert result[2].code == "EUR"

    def test_list_of_mappings(self):
        """Test a list of mappings."""
        result = coerce_array([{"code": "USD"}, {"code": "EUR"}], CurrencyType)
        assert [item.code for item in result] == ["USD", "EUR"]

    def test_single_mapping_is_element_zero(self):
        """Test that a single mapping becomes element 0."""
        result = coerce_array({"code": "USD", "amount": "55"}, CurrencyType)
        assert len(result) == 1
        assert result[0].amount == 55.0

    def test_single_scalar_is_element_zero(self):
        """Test that a single scalar becomes element 0."""
        assert list(coerce_array("x", String)) == ["x"]

    def test_none_items_become_defaults(self):
        """Test that None items become the default."""
        result = coerce_array([None, {"code": "USD"}], CurrencyType)
        assert isinstance(result[0], CurrencyType)
        assert list(coerce_array([None, "a"], String)) == [None, "a"]

    def test_reading_unset_composite_index_materializes_default(self):
        """Test reading an unset composite index."""
        result = coerce_array([], CurrencyType)
        item = result[0]
        assert isinstance(item, CurrencyType)
        assert result[0] is item

    def test_mixed_keys_are_treated_as_single_value(self):
        """Test that a mapping with non-numeric keys is one element."""
        with pytest.raises(UnknownFieldError):
            coerce_array({"0": {"code": "USD"}, "code": "EUR"}, CurrencyType)

    def test_existing_instances_are_kept(self):
        """Test that converted items are not rebuilt."""
        currency = CurrencyType({"code": "USD"})
        result = coerce_array([currency], CurrencyType)
        assert result[0] is currency
