from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
from core.config import CORS_ORIGINS
from routers import dataset, pca

app = FastAPI(title="PCA Finance Explorer API")


# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include Routers
app.include_router(dataset.router, prefix="/api", tags=["dataset"])
app.include_router(pca.router, prefix="/api", tags=["pca"])


@app.get("/")
def root():
    return {"message": "PCA Finance Explorer API is running"}


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
