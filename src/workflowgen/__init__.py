from .dsl import job, sh, sbt, use, JobBuilder, build
from .compiler import compile_workflow, compile_document, compile_job, compile_step
from .model import Run, ToolInvocation, UseAction, WorkflowJob, Document, CHECKOUT, SETUP_SCALA
from .settings import GeneratorSettings
from .errors import WorkflowGenError, InvalidKeyError

__all__ = [
    "job", "sh", "sbt", "use", "JobBuilder", "build",
    "compile_workflow", "compile_document", "compile_job", "compile_step",
    "Run", "ToolInvocation", "UseAction", "WorkflowJob", "Document", "CHECKOUT", "SETUP_SCALA",
    "GeneratorSettings", "WorkflowGenError", "InvalidKeyError",
]
