from dataclasses import dataclass

from maze_runner.core.errors import ConfigurationError


@dataclass(frozen=True)
class MazeConfig:
    default_rows: int = 20
    default_columns: int = 20
    min_rows: int = 10
    min_columns: int = 10
    max_rows: int = 100
    max_columns: int = 100

    # Seconds to pause after every animated mutation (cell carved, step taken).
    # 0 disables the pause entirely.
    drawing_speed: float = 0.005

    # Chance that an interior cell becomes a wall in unconstrained generation
    wall_probability: float = 0.3

    def validate_dimensions(self, rows: int, columns: int):
        if rows < self.min_rows:
            raise ConfigurationError(
                f"rows {rows} is less than minimum allowable number of rows {self.min_rows}")
        if rows > self.max_rows:
            raise ConfigurationError(
                f"rows {rows} is greater than maximum allowable number of rows {self.max_rows}")
        if columns < self.min_columns:
            raise ConfigurationError(
                f"columns {columns} is less than minimum allowable number of columns {self.min_columns}")
        if columns > self.max_columns:
            raise ConfigurationError(
                f"columns {columns} is greater than maximum allowable number of columns {self.max_columns}")


DEFAULT_CONFIG = MazeConfig()
