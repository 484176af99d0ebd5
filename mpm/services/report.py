from ..domain.network import END_TASK, START_TASK
from ..utils.graph import topological_order


def format_schedule_report(network, title="MPM Project Schedule Report"):
    """
    Format the schedule of a task network as a plain text report.

    Args:
        network: The TaskNetwork to report on
        title: Heading printed above the report

    Returns:
        str: The report, one line per task plus a critical path summary
    """
    durations = network.durations()
    earliest = network.earliest_dates()
    latest = network.latest_dates()
    slacks = network.slacks()
    critical = set(network.critical_path())

    width = max([len(str(task)) for task in durations] + [4])

    lines = [title, "=" * len(title)]
    lines.append(f"Project Duration: {network.project_duration()}")
    lines.append("")
    lines.append(
        f"{'Task':<{width}}  {'Duration':>8}  {'Earliest':>8}  {'Latest':>8}  {'Slack':>5}  Critical"
    )

    for task in topological_order(network.graph()):
        if task == END_TASK:
            duration = "-"
        else:
            duration = durations[task]
        flag = "*" if task in critical else ""
        lines.append(
            f"{task:<{width}}  {duration:>8}  {earliest[task]:>8}  "
            f"{latest[task]:>8}  {slacks[task]:>5}  {flag}"
        )

    lines.append("")
    lines.append("Critical Path:")
    lines.append("  " + " -> ".join(network.critical_path()))

    real_tasks = [task for task in network.critical_path() if task not in (START_TASK, END_TASK)]
    lines.append(f"  {len(real_tasks)} critical task(s)")

    return "\n".join(lines)
