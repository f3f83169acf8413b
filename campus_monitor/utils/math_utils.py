from typing import Sequence


PERCENT_MIN = 0.0
PERCENT_MAX = 100.0
# Центр карты: сюда ставится датчик, привязанный к карте без координат
MAP_CENTER_PERCENT = 50.0


def clamp(value: float, min_value: float, max_value: float) -> float:
    """
    «Зажимает» число в указанный диапазон [min_value, max_value].

    Args:
        value: исходное число.
        min_value: минимальное допустимое значение.
        max_value: максимальное допустимое значение.

    Returns:
        value, но не меньше min_value и не больше max_value.
    """
    return max(min_value, min(value, max_value))


def clamp_percent(value: float) -> float:
    return clamp(value, PERCENT_MIN, PERCENT_MAX)


def to_percent(click: float, origin: float, size: float) -> float:
    """
    Переводит пиксельную позицию клика в процент от размера контейнера.

    Args:
        click: координата клика (clientX / clientY).
        origin: левая/верхняя граница отрисованного контейнера.
        size: ширина/высота контейнера в пикселях.

    Returns:
        Процент в диапазоне [0, 100].

    Raises:
        ValueError: если размер контейнера не положительный.
    """
    if size <= 0:
        raise ValueError("Container size must be positive")
    return clamp_percent((click - origin) / size * 100.0)


def to_pixels(percent: float, size: float) -> float:
    """
    Обратное преобразование: позиция маркера в пикселях для текущего размера контейнера.
    """
    return clamp_percent(percent) / 100.0 * size


def point_to_percent(
    click: Sequence[float],
    origin: Sequence[float],
    size: Sequence[float],
) -> tuple[float, float]:
    """
    То же, что to_percent, но сразу для пары (x, y).
    """
    if len(click) != 2 or len(origin) != 2 or len(size) != 2:
        raise ValueError("Points must be two-dimensional")
    return (
        to_percent(click[0], origin[0], size[0]),
        to_percent(click[1], origin[1], size[1]),
    )
