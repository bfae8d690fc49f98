from promotion.tasks.models.task_model import Task
