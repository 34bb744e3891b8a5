#!/usr/bin/env python3
"""
Заглушка сервиса people для локальной разработки

    python scripts/mock_people_service.py --port 8081
"""
import argparse
import sys
from pathlib import Path
sys.path.append(str(Path(__file__).parent.parent))

import uvicorn
from fastapi import FastAPI, HTTPException, Query

from utils.passport import format_passport

PEOPLE = [
    {"name": "Петр", "surname": "Петров", "patronymic": "Петрович",
     "address": "г. Санкт-Петербург, пр. Невский, д. 10", "passport": "4012 345678"},
    {"name": "Сергей", "surname": "Сидоров", "patronymic": "Сергеевич",
     "address": "г. Екатеринбург, ул. Свердлова, д. 25", "passport": "6543 210987"},
    {"name": "Анна", "surname": "Смирнова", "patronymic": "Андреевна",
     "address": "г. Новосибирск, ул. Гоголя, д. 15", "passport": "9876 543210"},
    {"name": "Олег", "surname": "Новиков",
     "address": "г. Ростов-на-Дону, ул. Советская, д. 12", "passport": "1234 567890"},
    {"name": "Татьяна", "surname": "Морозова",
     "address": "г. Самара, ул. Ленинградская, д. 5", "passport": "5678 901234"},
    {"name": "Александр", "surname": "Волков",
     "address": "г. Омск, пр. Мира, д. 18", "passport": "9012 345678"},
    {"name": "Марина", "surname": "Соколова",
     "address": "г. Челябинск, ул. Труда, д. 7", "passport": "3456 789012"},
    {"name": "Иван", "surname": "Иванов", "patronymic": "Иванович",
     "address": "г. Москва, ул. Тверская, д. 5", "passport": "4321 123456"},
    {"name": "Мария", "surname": "Кузнецова", "patronymic": "Александровна",
     "address": "г. Казань, ул. Кремлевская, д. 20", "passport": "8765 432109"},
]

app = FastAPI(title="People service (mock)")


@app.get("/info")
async def info(passport_serie: int = Query(..., alias="passportSerie"), passport_number: int = Query(..., alias="passportNumber")):
    passport = format_passport(passport_serie, passport_number)
    for person in PEOPLE:
        if person["passport"] == passport:
            return {key: value for key, value in person.items() if key != "passport"}
    raise HTTPException(status_code=404, detail="Person not found")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Mock people service")
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=8081)
    args = parser.parse_args()
    uvicorn.run(app, host=args.host, port=args.port)
