import pytest

from assessment_take.services.pagination import page_numbers, paginate


@pytest.mark.parametrize(
    "current, count, expected",
    [
        (1, 1, [1]),
        (3, 7, [1, 2, 3, 4, 5, 6, 7]),
        (1, 10, [1, 2, "...", 10]),
        (3, 10, [1, 2, 3, 4, "...", 10]),
        (5, 10, [1, "...", 4, 5, 6, "...", 10]),
        (9, 10, [1, "...", 8, 9, 10]),
        (10, 10, [1, "...", 9, 10]),
    ],
)
def test_page_numbers(current, count, expected):
    assert page_numbers(current, count) == expected


class TestPaginate:
    def test_middle_page(self):
        p = paginate(list(range(25)), page=2, page_size=10)
        assert p.items == list(range(10, 20))
        assert (p.page, p.page_count, p.total) == (2, 3, 25)

    def test_last_page_is_partial(self):
        assert paginate(list(range(25)), page=3, page_size=10).items == [20, 21, 22, 23, 24]

    @pytest.mark.parametrize("page, expected", [(0, 1), (-2, 1), (99, 3)])
    def test_page_is_clamped(self, page, expected):
        assert paginate(list(range(25)), page=page, page_size=10).page == expected

    def test_empty(self):
        p = paginate([], page=1, page_size=10)
        assert p.items == []
        assert p.page_count == 1
        assert p.pages == [1]

    def test_page_size_must_be_positive(self):
        with pytest.raises(ValueError):
            paginate([1, 2], page=1, page_size=0)
