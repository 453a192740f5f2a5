"""CLI 入口模块 -- python -m complymate.core <command>

支持的命令：
  calendar             打印本次会话生成的合规任务日历
  notifications        打印加载时扫描生成的通知
  summary              打印部门合规摘要（打印版）
  export-csv [path]    导出任务 CSV（默认输出到 stdout）
"""

import sys
from pathlib import Path

from .directory import resolve_user_name
from .logging_config import setup_logging
from .reports import export_tasks_csv, filter_tasks, render_print_summary
from .session import Session, create_session

USAGE = """用法: python -m complymate.core <command>
命令:
  calendar             打印合规任务日历
  notifications        打印初始通知
  summary              打印部门合规摘要
  export-csv [path]    导出任务 CSV"""


def main(argv: list[str] | None = None) -> int:
    """CLI 主入口"""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print(USAGE)
        return 1

    command = args[0]
    setup_logging()

    if command == "calendar":
        print_calendar(create_session())
    elif command == "notifications":
        print_notifications(create_session())
    elif command == "summary":
        session = create_session()
        print(render_print_summary(session.state.tasks, session.state.users), end="")
    elif command == "export-csv":
        export_csv(create_session(), args[1] if len(args) > 1 else None)
    else:
        print(f"未知命令: {command}")
        print("可用命令: calendar, notifications, summary, export-csv")
        return 1
    return 0


def print_calendar(session: Session) -> None:
    """按到期日打印任务"""
    state = session.state
    print(f"今天: {session.today().isoformat()}  任务数: {len(state.tasks)}")
    for task in filter_tasks(state.tasks):
        amount = f"{task.amount:,.0f}" if task.amount else "Filing"
        assignee = resolve_user_name(state.users, task.assigned_person_id)
        print(
            f"{task.due_date.isoformat()}  {task.status.value:<9}  "
            f"{task.task_name:<28}  {task.applicable_period:<16}  "
            f"{amount:>10}  {assignee}"
        )


def print_notifications(session: Session) -> None:
    state = session.state
    print(f"通知数: {len(state.notifications)}")
    for n in state.notifications:
        recipient = resolve_user_name(state.users, n.user_id)
        print(f"[{n.type.value}] {recipient}: {n.message}")


def export_csv(session: Session, path: str | None) -> None:
    """导出任务 CSV 到文件或 stdout"""
    content = export_tasks_csv(session.state.tasks)
    if path is None:
        print(content, end="")
        return
    Path(path).write_text(content, encoding="utf-8")
    print(f"已导出 {len(session.state.tasks)} 条任务到 {path}")


if __name__ == "__main__":
    sys.exit(main())
