# Пакет моделей базы данных
# Здесь импортируются все модели, чтобы Alembic мог их обнаружить.
# Связи между таблицами — обычные индексированные integer-колонки без FOREIGN KEY:
# целостность обеспечивает приложение (каскадное удаление и очистка «сирот»).
from .building import Building
from .floor import Floor
from .map import Map
from .sensor import Sensor
from .plant import Plant
from .measurement import Measurement
from .watering_schedule import WateringSchedule
