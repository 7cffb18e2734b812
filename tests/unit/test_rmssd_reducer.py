"""
Тесты для редуктора RMSSD (differences → squares → mean → sqrt)

Проверяемые инварианты:
1. Все промежуточные значения имеют dtype ширины
2. Сумма накапливается строго слева направо
3. Результат — конечный неотрицательный скаляр той же ширины
4. Порядок сэмплов влияет на результат
5. N < 2 и чужой dtype отвергаются
"""

import math
import warnings

import numpy as np
import pytest

from src.core.domain.width import FloatWidth
from src.core.errors import InsufficientDataError, ReductionOverflowError
from src.core.math.rmssd import (
    RMSSD_MIN_SAMPLES,
    mean_left_to_right,
    reduce_rmssd,
    square_in_place,
    successive_differences,
)
from src.core.math.width_ops import NARROW_OPS, STANDARD_OPS, ops_for


ALL_WIDTHS = list(FloatWidth)


def _array(values, width: FloatWidth) -> np.ndarray:
    return np.array([width.dtype(v) for v in values], dtype=width.dtype)


# =============================================================================
# STAGES
# =============================================================================


class TestSuccessiveDifferences:
    """Шаг 1: разности"""

    @pytest.mark.parametrize("width", ALL_WIDTHS, ids=lambda w: w.value)
    def test_values_and_dtype(self, width: FloatWidth) -> None:
        samples = _array(["1.0", "2.0", "4.0"], width)
        diffs = successive_differences(samples, ops_for(width))
        assert diffs.dtype == np.dtype(width.dtype)
        assert diffs.tolist() == [1.0, 2.0]

    def test_length_is_n_minus_one(self) -> None:
        samples = _array(["800", "840", "820", "810", "830"], FloatWidth.STANDARD)
        assert successive_differences(samples, STANDARD_OPS).size == 4

    def test_does_not_modify_samples(self) -> None:
        samples = _array(["800", "840", "820"], FloatWidth.STANDARD)
        samples.setflags(write=False)
        diffs = successive_differences(samples, STANDARD_OPS)
        square_in_place(diffs, STANDARD_OPS)
        assert samples.tolist() == [800.0, 840.0, 820.0]

    def test_sign(self) -> None:
        """diff[i-1] = sample[i] - sample[i-1]"""
        samples = _array(["840", "800"], FloatWidth.STANDARD)
        assert successive_differences(samples, STANDARD_OPS).tolist() == [-40.0]

    def test_wrong_dtype_raises(self) -> None:
        samples = np.array([1.0, 2.0], dtype=np.float64)
        with pytest.raises(TypeError, match="does not match width"):
            successive_differences(samples, NARROW_OPS)


class TestSquareInPlace:
    """Шаг 2: квадраты"""

    def test_in_place(self) -> None:
        diffs = _array(["40", "-20"], FloatWidth.NARROW)
        result = square_in_place(diffs, NARROW_OPS)
        assert result is diffs
        assert diffs.tolist() == [1600.0, 400.0]
        assert diffs.dtype == np.float32


class TestMeanLeftToRight:
    """Шаг 3: среднее"""

    @pytest.mark.parametrize("width", ALL_WIDTHS, ids=lambda w: w.value)
    def test_mean_dtype(self, width: FloatWidth) -> None:
        values = _array(["1.0", "4.0"], width)
        mean = mean_left_to_right(values, ops_for(width))
        assert mean == 2.5
        assert type(mean) is width.dtype

    def test_sequential_accumulation(self) -> None:
        """1e8 + 1 + 1 + ... в float32: каждая единица теряется"""
        values = np.array([1e8] + [1.0] * 16, dtype=np.float32)
        mean = mean_left_to_right(values, NARROW_OPS)
        assert mean == np.float32(1e8) / np.float32(17)

    def test_empty_raises(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            mean_left_to_right(np.array([], dtype=np.float64), STANDARD_OPS)


# =============================================================================
# REDUCE RMSSD
# =============================================================================


class TestReduceRMSSD:
    """Тесты reduce_rmssd"""

    def test_three_samples_standard(self) -> None:
        """[1, 2, 4] → diffs [1, 2] → squares [1, 4] → mean 2.5 → sqrt"""
        result = reduce_rmssd(_array(["1.0", "2.0", "4.0"], FloatWidth.STANDARD), FloatWidth.STANDARD)
        assert result == 1.5811388300841898
        assert type(result) is np.float64

    def test_two_samples(self) -> None:
        """[1, 2] → единственная разность 1 → RMSSD 1"""
        for width in ALL_WIDTHS:
            result = reduce_rmssd(_array(["1.0", "2.0"], width), width)
            assert result == 1.0
            assert type(result) is width.dtype

    def test_narrow_uses_single_precision(self) -> None:
        result = reduce_rmssd(_array(["1.0", "2.0", "4.0"], FloatWidth.NARROW), FloatWidth.NARROW)
        assert type(result) is np.float32
        assert result == np.sqrt(np.float32(2.5))

    def test_extended_dtype(self) -> None:
        result = reduce_rmssd(_array(["1.0", "2.0", "4.0"], FloatWidth.EXTENDED), FloatWidth.EXTENDED)
        assert type(result) is np.longdouble
        assert result == np.sqrt(np.longdouble("2.5"))
        assert float(result) == pytest.approx(1.5811388300841898)

    def test_rr_intervals(self) -> None:
        """Diffs 40, -20 → mean(d^2) = 1000 → sqrt ≈ 31.62"""
        samples = _array(["800", "840", "820"], FloatWidth.STANDARD)
        assert reduce_rmssd(samples, FloatWidth.STANDARD) == pytest.approx(math.sqrt(1000.0))

    def test_constant_is_zero(self) -> None:
        samples = _array(["800", "800", "800"], FloatWidth.STANDARD)
        assert reduce_rmssd(samples, FloatWidth.STANDARD) == 0.0

    @pytest.mark.parametrize("width", ALL_WIDTHS, ids=lambda w: w.value)
    def test_finite_non_negative(self, width: FloatWidth) -> None:
        samples = _array(["812.5", "790.25", "-15.0", "1003.125", "0.0", "999.999"], width)
        result = reduce_rmssd(samples, width)
        assert np.isfinite(result)
        assert result >= 0

    def test_order_is_significant(self) -> None:
        """Перестановка сэмплов меняет разности и RMSSD"""
        ordered = _array(["1.0", "2.0", "4.0"], FloatWidth.STANDARD)
        shuffled = _array(["1.0", "4.0", "2.0"], FloatWidth.STANDARD)
        assert reduce_rmssd(ordered, FloatWidth.STANDARD) != reduce_rmssd(shuffled, FloatWidth.STANDARD)

    def test_reversal_flips_difference_signs(self) -> None:
        """Разворот меняет знаки (и порядок) разностей"""
        forward = _array(["1.0", "2.0", "4.0"], FloatWidth.STANDARD)
        backward = forward[::-1].copy()
        assert successive_differences(forward, STANDARD_OPS).tolist() == [1.0, 2.0]
        assert successive_differences(backward, STANDARD_OPS).tolist() == [-2.0, -1.0]

    def test_widths_agree_within_precision(self) -> None:
        """narrow и standard отличаются только на потерю точности float32"""
        tokens = ["812.3456", "790.125", "803.75", "845.0625", "799.9995", "821.5"]
        narrow = reduce_rmssd(_array(tokens, FloatWidth.NARROW), FloatWidth.NARROW)
        standard = reduce_rmssd(_array(tokens, FloatWidth.STANDARD), FloatWidth.STANDARD)
        extended = reduce_rmssd(_array(tokens, FloatWidth.EXTENDED), FloatWidth.EXTENDED)
        assert float(narrow) == pytest.approx(float(standard), rel=1e-5)
        assert float(extended) == pytest.approx(float(standard), rel=1e-12)

    def test_insufficient_samples_raise(self) -> None:
        with pytest.raises(InsufficientDataError) as exc_info:
            reduce_rmssd(_array(["5.0"], FloatWidth.STANDARD), FloatWidth.STANDARD)
        assert exc_info.value.required == RMSSD_MIN_SAMPLES
        assert exc_info.value.actual == 1

    def test_wrong_dtype_raises(self) -> None:
        with pytest.raises(TypeError):
            reduce_rmssd(np.array([1.0, 2.0], dtype=np.float64), FloatWidth.NARROW)

    def test_two_dimensional_raises(self) -> None:
        with pytest.raises(ValueError, match="one-dimensional"):
            reduce_rmssd(np.ones((2, 2), dtype=np.float64), FloatWidth.STANDARD)

    def test_deterministic(self) -> None:
        samples = _array(["812.3456", "790.125", "803.75"], FloatWidth.NARROW)
        results = {float(reduce_rmssd(samples, FloatWidth.NARROW)) for _ in range(5)}
        assert len(results) == 1


# =============================================================================
# OVERFLOW
# =============================================================================


def _max(width: FloatWidth):
    return np.finfo(width.dtype).max


class TestReduceOverflow:
    """Переполнение ширины внутри редукции → ReductionOverflowError, не inf"""

    @pytest.mark.parametrize("width", ALL_WIDTHS, ids=lambda w: w.value)
    def test_difference_overflow(self, width: FloatWidth) -> None:
        """max - (-max) не помещается в ширину"""
        top = _max(width)
        samples = np.array([-top, top], dtype=width.dtype)
        with pytest.raises(ReductionOverflowError) as exc_info:
            reduce_rmssd(samples, width)
        assert exc_info.value.width is width
        assert exc_info.value.stage == ReductionOverflowError.DIFFERENCE

    @pytest.mark.parametrize("width", ALL_WIDTHS, ids=lambda w: w.value)
    def test_square_overflow(self, width: FloatWidth) -> None:
        samples = np.array([0, _max(width)], dtype=width.dtype)
        with pytest.raises(ReductionOverflowError) as exc_info:
            reduce_rmssd(samples, width)
        assert exc_info.value.stage == ReductionOverflowError.SQUARE

    @pytest.mark.parametrize("width", ALL_WIDTHS, ids=lambda w: w.value)
    def test_sum_overflow(self, width: FloatWidth) -> None:
        """Каждый квадрат ≈ 0.81·max конечен, их сумма — нет"""
        step = np.sqrt(_max(width), dtype=width.dtype) * width.dtype("0.9")
        samples = np.array([0, step, 0], dtype=width.dtype)
        with pytest.raises(ReductionOverflowError) as exc_info:
            reduce_rmssd(samples, width)
        assert exc_info.value.stage == ReductionOverflowError.SUM

    @pytest.mark.parametrize("width", ALL_WIDTHS, ids=lambda w: w.value)
    def test_largest_single_square_is_finite(self, width: FloatWidth) -> None:
        step = np.sqrt(_max(width), dtype=width.dtype) * width.dtype("0.9")
        result = reduce_rmssd(np.array([0, step], dtype=width.dtype), width)
        assert np.isfinite(result)
        assert result == step

    def test_narrow_square_overflow_from_decimal_samples(self) -> None:
        """0 и 1e20 валидны для float32, но 1e40 уже нет"""
        with pytest.raises(ReductionOverflowError) as exc_info:
            reduce_rmssd(_array(["0", "1e20"], FloatWidth.NARROW), FloatWidth.NARROW)
        assert exc_info.value.stage == ReductionOverflowError.SQUARE
        assert "float" in str(exc_info.value)

    def test_overflow_emits_no_runtime_warning(self) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            with pytest.raises(ReductionOverflowError):
                reduce_rmssd(_array(["0", "1e20"], FloatWidth.NARROW), FloatWidth.NARROW)
