from mpm.domain.network import TaskNetwork
from mpm.services.report import format_schedule_report


def create_sample_project():
    # Three tasks: T2 waits for T1, T3 waits for both
    task_names = ["T1", "T2", "T3"]
    durations = [3, 2, 1]
    predecessors = [
        [],
        ["T1"],
        ["T1", "T2"],
    ]

    network = TaskNetwork(task_names, durations, predecessors)

    print(format_schedule_report(network))

    return network


if __name__ == "__main__":
    create_sample_project()
