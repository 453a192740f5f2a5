"""报表路由

GET /api/reports/dashboard: 运营统计 + 资金统计 + 图表 + 待办/逾期列表。
GET /api/reports/summary: 部门合规摘要。
GET /api/reports/tasks.csv: 任务 CSV 导出。
GET /api/reports/financials.csv: 资金负债 CSV 导出。
GET /api/reports/print: 纯文本打印版摘要。
"""

from complymate.core.config import CSV_EXPORT_FILENAME, FINANCIALS_EXPORT_FILENAME
from complymate.core.reports import (
    dashboard,
    department_summary,
    export_financials_csv,
    export_tasks_csv,
    render_print_summary,
)
from complymate.core.session import Session
from fastapi import APIRouter, Depends
from starlette.responses import PlainTextResponse, Response

from ..deps import get_session
from ..services.responses import content_disposition

router = APIRouter()


def _csv_response(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": content_disposition(filename)},
    )


@router.get("/api/reports/dashboard")
async def get_dashboard(session: Session = Depends(get_session)):
    return dashboard(session.state.tasks, session.today())


@router.get("/api/reports/summary")
async def get_summary(session: Session = Depends(get_session)):
    """部门合规摘要（完成率四舍五入为整数百分比）"""
    return {
        "departments": [
            s.model_dump(mode="json") for s in department_summary(session.state.tasks)
        ]
    }


@router.get("/api/reports/tasks.csv")
async def get_tasks_csv(session: Session = Depends(get_session)):
    return _csv_response(export_tasks_csv(session.state.tasks), CSV_EXPORT_FILENAME)


@router.get("/api/reports/financials.csv")
async def get_financials_csv(session: Session = Depends(get_session)):
    return _csv_response(export_financials_csv(session.state.tasks), FINANCIALS_EXPORT_FILENAME)


@router.get("/api/reports/print", response_class=PlainTextResponse)
async def get_print_summary(session: Session = Depends(get_session)):
    state = session.state
    return render_print_summary(state.tasks, state.users)
