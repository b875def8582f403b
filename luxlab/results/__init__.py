from luxlab.results.writers import write_grid_csv, write_result_json

__all__ = ["write_grid_csv", "write_result_json"]
