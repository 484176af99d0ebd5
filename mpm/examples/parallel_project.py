from mpm.domain.network import TaskNetwork
from mpm.services.report import format_schedule_report


def create_parallel_project():
    # A and B run side by side and both feed C
    network = TaskNetwork(
        ["A", "B", "C"],
        [2, 2, 5],
        [[], [], ["A", "B"]],
    )

    print(format_schedule_report(network, title="Parallel Branches Example"))

    return network


if __name__ == "__main__":
    create_parallel_project()
