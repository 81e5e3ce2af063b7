import copy
import logging
from typing import Dict, List, Optional

from .api import ApiClient, ApiError

logger = logging.getLogger(__name__)


class BoardState:
    """Local copy of one project board with optimistic reordering.

    Moves are applied locally before the request is sent. If the server
    rejects them the board is reloaded, so local state never drifts from
    what the server stored.
    """

    def __init__(self, api: ApiClient, project_id: int):
        self.api = api
        self.project_id = project_id
        self.columns: List[dict] = []
        self.tasks_by_column: Dict[int, List[dict]] = {}
        self.last_error: Optional[ApiError] = None

    def load(self):
        board = self.api.get_board(self.project_id)
        self.columns = sorted(board["columns"], key=lambda c: c["position"])
        self.tasks_by_column = {column["id"]: [] for column in self.columns}
        for column_id, tasks in board["tasksByColumn"].items():
            self.tasks_by_column[int(column_id)] = sorted(tasks, key=lambda t: t["position"])
        return self

    def column_ids(self) -> List[int]:
        return [column["id"] for column in self.columns]

    def task_ids(self, column_id: int) -> List[int]:
        return [task["id"] for task in self.tasks_by_column.get(column_id, [])]

    def find_task(self, task_id: int):
        for column_id, tasks in self.tasks_by_column.items():
            for index, task in enumerate(tasks):
                if task["id"] == task_id:
                    return column_id, index
        return None, None

    def _apply_move(self, task_id: int, dest_column_id: int, dest_index: int):
        source_column_id, source_index = self.find_task(task_id)
        task = self.tasks_by_column[source_column_id].pop(source_index)
        task["column_id"] = dest_column_id
        dest = self.tasks_by_column.setdefault(dest_column_id, [])
        dest.insert(max(0, min(dest_index, len(dest))), task)
        for column_id in {source_column_id, dest_column_id}:
            for position, item in enumerate(self.tasks_by_column[column_id]):
                item["position"] = position

    def _snapshot(self):
        return copy.deepcopy((self.columns, self.tasks_by_column))

    def _reconcile(self, error: ApiError, snapshot) -> bool:
        logger.warning("Board %s out of sync (%s), reloading", self.project_id, error)
        self.last_error = error
        try:
            self.load()
        except ApiError as e:
            logger.warning("Board %s reload failed (%s), restoring local state", self.project_id, e)
            self.columns, self.tasks_by_column = snapshot
        return False

    def move_task(self, task_id: int, dest_column_id: int, dest_index: int) -> bool:
        source_column_id, source_index = self.find_task(task_id)
        if source_column_id is None:
            raise KeyError(task_id)

        snapshot = self._snapshot()
        self._apply_move(task_id, dest_column_id, dest_index)
        try:
            self.api.move_task(task_id, source_column_id, source_index, dest_column_id, dest_index)
        except ApiError as e:
            return self._reconcile(e, snapshot)
        self.last_error = None
        return True

    def reorder_columns(self, column_ids: List[int]) -> bool:
        snapshot = self._snapshot()
        by_id = {column["id"]: column for column in self.columns}
        listed = [by_id[column_id] for column_id in column_ids if column_id in by_id]
        # Columns left out of the list keep their order after the listed ones
        wanted = set(column_ids)
        omitted = [column for column in self.columns if column["id"] not in wanted]
        self.columns = listed + omitted
        for position, column in enumerate(self.columns):
            column["position"] = position
        try:
            self.api.reorder_columns(self.project_id, column_ids)
        except ApiError as e:
            return self._reconcile(e, snapshot)
        self.last_error = None
        return True
