from fastapi import Request

from krishi_mitra.services.query_pipeline import AdvisoryPipeline


def get_pipeline(request: Request) -> AdvisoryPipeline:
    return request.app.state.pipeline
