class MPMError(Exception):
    """Base class for every error raised by the MPM scheduler."""

    pass


class ConstructionError(MPMError, ValueError):
    """Raised when the task data cannot be turned into a valid network."""

    pass


class LengthMismatchError(ConstructionError):
    """The task names, durations and predecessor lists differ in length."""

    def __init__(self, position):
        self.position = position
        super().__init__(
            "The number of task names, task durations and task predecessors "
            f"do not match (mismatch detected at position {position})"
        )


class DuplicateDurationError(ConstructionError):
    def __init__(self, task, old_duration, new_duration):
        self.task = task
        self.old_duration = old_duration
        self.new_duration = new_duration
        super().__init__(
            f"Task {task} has two different durations: {old_duration} and {new_duration}"
        )


class DuplicatePredecessorSetError(ConstructionError):
    def __init__(self, task):
        self.task = task
        super().__init__(f"Task {task} has two sets of predecessors declared")


class UnknownPredecessorError(ConstructionError):
    def __init__(self, task, predecessor):
        self.task = task
        self.predecessor = predecessor
        super().__init__(
            f"Task {predecessor}, declared predecessor of {task}, does not exist"
        )


class ReservedTaskNameError(ConstructionError):
    def __init__(self, task):
        self.task = task
        super().__init__(f"Task name {task!r} is reserved")


class InvalidPredecessorListError(ConstructionError):
    def __init__(self, task, predecessor_list):
        self.task = task
        self.predecessor_list = predecessor_list
        super().__init__(
            f"Task {task} has an invalid predecessor list {predecessor_list!r} "
            "(expected a sequence of task names or None)"
        )


class InvalidDurationError(ConstructionError):
    def __init__(self, task, duration):
        self.task = task
        self.duration = duration
        super().__init__(
            f"Task {task} has an invalid duration {duration!r} "
            "(expected a non-negative integer)"
        )


class CyclicDependencyError(ConstructionError):
    """The predecessor relation contains a cycle."""

    def __init__(self, cycle):
        self.cycle = list(cycle)
        path = " -> ".join(str(task) for task in self.cycle)
        super().__init__(f"Task dependencies contain a cycle: {path}")


class ComputationError(MPMError, RuntimeError):
    """Raised when a propagation sweep finds the network inconsistent."""

    pass


class NoPredecessorError(ComputationError):
    def __init__(self, task):
        self.task = task
        super().__init__(f"Task {task} has no predecessor")


class NoSuccessorError(ComputationError):
    def __init__(self, task):
        self.task = task
        super().__init__(f"Task {task} has no successor")


class StalledSweepError(ComputationError):
    """A sweep went through its whole work queue without resolving a task."""

    def __init__(self, tasks):
        self.tasks = list(tasks)
        names = ", ".join(str(task) for task in self.tasks)
        super().__init__(f"Propagation stalled on unresolvable tasks: {names}")


class TaskImportError(MPMError):
    """Raised when task data read from a file is malformed."""

    pass
