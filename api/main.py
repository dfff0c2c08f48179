from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cases import router as cases_router
from core import config, db
from crime_scenes import router as crime_scenes_router
from judges import router as judges_router
from offenders import router as offenders_router
from prosecutors import router as prosecutors_router
from verdicts import router as verdicts_router
from victims import router as victims_router

# Built once per process; handlers receive it through config.get_settings.
settings = config.load_settings()
config.configure_logging(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize the DB pool once per process.
    await db.init_pool(app.state.settings)
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="criminal-records-api", lifespan=lifespan)
app.state.settings = settings

# Allow local frontend dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(offenders_router.router, tags=["offenders"])
app.include_router(prosecutors_router.router, tags=["prosecutors"])
app.include_router(victims_router.router, tags=["victims"])
app.include_router(crime_scenes_router.router, tags=["crime_scenes"])
app.include_router(cases_router.router, tags=["cases"])
app.include_router(verdicts_router.router, tags=["verdicts"])
app.include_router(judges_router.router, tags=["judges"])

RESOURCES = {
    "offenders": [
        "GET /offenders",
        "GET /offenders/{offender_id}",
        "GET /offenders/{offender_id}/defendant",
        "GET /offenders/{offender_id}/case",
        "POST /offenders",
    ],
    "prosecutors": [
        "GET /prosecutors",
        "GET /prosecutors/{prosecutor_id}",
        "POST /prosecutors",
        "PUT /prosecutors",
    ],
    "victims": ["GET /victims", "GET /victims/{victim_id}"],
    "crime_scenes": ["GET /crime_scenes", "GET /crime_scenes/{crime_scene_id}"],
    "cases": ["GET /cases", "GET /cases/{case_id}"],
    "verdicts": ["GET /verdicts", "GET /verdicts/{verdict_id}"],
    "judges": ["GET /judges", "GET /judges/{judge_id}"],
}


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {
        "message": "criminal-records api",
        "resources": RESOURCES,
        "pagination": {
            "page": f"integer >= {settings.page_min}, default {settings.default_page}",
            "pageSize": (
                f"integer between {settings.page_size_min} and {settings.page_size_max}, "
                f"default {settings.default_page_size}"
            ),
            "sort": "column name of the resource; unknown columns are ignored",
        },
    }
