"""
Review Routes

POST /reviews/submit - Review a company (students only, once per company)
PUT /reviews/{review_id} - Edit own review
DELETE /reviews/{review_id} - Delete own review
GET /reviews/company/{company_id} - Reviews of a company with averages
"""

from fastapi import APIRouter, Depends

from placement_hub.core.auth import Identity, get_current_student, get_current_user
from placement_hub.services.review_service import SCORE_FIELDS, ReviewService
from placement_hub.schemas.schemas import (
    APIResponse, CompanyReviewsResponse, ReviewCreate, ReviewResponse, ReviewUpdate
)

router = APIRouter(prefix="/reviews", tags=["Reviews"])


@router.post("/submit", response_model=ReviewResponse, status_code=201)
async def submit_review(review: ReviewCreate, student: Identity = Depends(get_current_student)):
    scores = {field: getattr(review, field) for field in SCORE_FIELDS}
    created = ReviewService().submit(student, review.company_id, scores, review.comment)
    return ReviewResponse(message="Review submitted", review=created)


@router.put("/{review_id}", response_model=ReviewResponse)
async def update_review(review_id: str, update: ReviewUpdate, user: Identity = Depends(get_current_user)):
    updated = ReviewService().update(user, review_id, update.model_dump(exclude_unset=True))
    return ReviewResponse(message="Review updated", review=updated)


@router.delete("/{review_id}", response_model=APIResponse)
async def delete_review(review_id: str, user: Identity = Depends(get_current_user)):
    ReviewService().delete(user, review_id)
    return APIResponse(message="Review deleted")


@router.get("/company/{company_id}", response_model=CompanyReviewsResponse)
async def company_reviews(company_id: str, user: Identity = Depends(get_current_user)):
    return CompanyReviewsResponse(**ReviewService().list_for_company(company_id))
