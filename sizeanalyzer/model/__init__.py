"""Project model: Gradle projects, their contexts and files."""

from sizeanalyzer.model.context import GradleContext
from sizeanalyzer.model.file_data import FileData
from sizeanalyzer.model.project import Project, is_on_demand

__all__ = ["GradleContext", "FileData", "Project", "is_on_demand"]
