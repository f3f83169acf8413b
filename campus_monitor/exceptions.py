class AppException(Exception):
    """
    Базовый класс для всех исключений приложения.
    """
    status_code = 500


class NotFoundError(AppException):
    """
    Ресурс не найден (например, при поиске в БД).
    """
    status_code = 404


class ValidationError(AppException):
    """
    Ошибка валидации входных данных: неверные ссылки на здание/этаж/карту,
    некорректные координаты, недопустимая сортировка.
    """
    status_code = 400


class ConflictError(AppException):
    """
    Нарушение уникальности (slug здания, уровень этажа, имя датчика).
    Сообщение всегда содержит "already exists".
    """
    status_code = 400
