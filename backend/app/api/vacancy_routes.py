from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from backend.app.services.vacancy_parser import parse_vacancy_reply

router = APIRouter()


class VacancyParseRequest(BaseModel):
    reply: str = ""


@router.post("/parse")
def vacancy_parse(req: VacancyParseRequest) -> dict:
    record = parse_vacancy_reply(req.reply)
    return {"ok": True, "vacancy": record.to_dict()}
