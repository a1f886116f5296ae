"""
Tests for reduction-axis tags.
"""

import pytest

from pydensela.core.exceptions import ValidationError
from pydensela.core.layout import Layout
from pydensela.core.tags import Axis, as_axis, resolve_axis


class TestAsAxis:

    @pytest.mark.parametrize("value, expected", [
        (1, Axis.ONE),
        (2, Axis.TWO),
        ('major', Axis.MAJOR),
        ('minor', Axis.MINOR),
        ('leading', Axis.LEADING),
        (Axis.LEADING, Axis.LEADING),
    ])
    def test_accepted(self, value, expected):
        assert as_axis(value) is expected

    @pytest.mark.parametrize("value", [0, 3, True, 'rows', None])
    def test_rejected(self, value):
        with pytest.raises(ValidationError, match="axis"):
            as_axis(value)


class TestResolveAxis:

    @pytest.mark.parametrize("layout", list(Layout))
    def test_explicit_tags_ignore_layout(self, layout):
        assert resolve_axis(1, layout) == 0
        assert resolve_axis(Axis.MAJOR, layout) == 0
        assert resolve_axis(2, layout) == 1
        assert resolve_axis(Axis.MINOR, layout) == 1

    def test_leading_is_layout_sensitive(self):
        assert resolve_axis(Axis.LEADING, Layout.ROW_MAJOR) == 1
        assert resolve_axis(Axis.LEADING, Layout.COLUMN_MAJOR) == 0
