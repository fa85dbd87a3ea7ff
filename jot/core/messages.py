from textual.message import Message


class ToggleTaskRequest(Message):
    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__()


class EditTaskRequest(Message):
    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__()


class DeleteTaskRequest(Message):
    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__()


class SubmitTaskRequest(Message):
    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__()


class FilterChangeRequest(Message):
    def __init__(self, filter_name: str) -> None:
        self.filter_name = filter_name
        super().__init__()
