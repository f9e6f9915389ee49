"""
Company Routes

POST /company/profile - Create company profile (recruiter only)
GET /company/profile - Get own company profile
PUT /company/profile - Update own company profile
GET /company/{company_id} - Get any company profile
"""

from fastapi import APIRouter, Depends

from placement_hub.core.auth import Identity, get_current_recruiter, get_current_user
from placement_hub.core.errors import NotFound
from placement_hub.services.company_service import CompanyService
from placement_hub.services.mongo_service import serialize_doc
from placement_hub.schemas.schemas import CompanyCreate, CompanyUpdate, CompanyResponse

router = APIRouter(prefix="/company", tags=["Companies"])


@router.post("/profile", response_model=CompanyResponse, status_code=201)
async def create_profile(data: CompanyCreate, recruiter: Identity = Depends(get_current_recruiter)):
    """Create company profile. One per recruiter."""
    company = CompanyService().create(recruiter, data.model_dump())
    return CompanyResponse(message="Company profile created successfully", company=company)


@router.get("/profile", response_model=CompanyResponse)
async def get_profile(recruiter: Identity = Depends(get_current_recruiter)):
    company = CompanyService().get_for_owner(recruiter.id)
    if not company:
        raise NotFound("Company profile not found. Create profile first.")
    return CompanyResponse(company=serialize_doc(company))


@router.put("/profile", response_model=CompanyResponse)
async def update_profile(data: CompanyUpdate, recruiter: Identity = Depends(get_current_recruiter)):
    company = CompanyService().update(recruiter, data.model_dump(exclude_unset=True))
    return CompanyResponse(message="Profile updated successfully", company=company)


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(company_id: str, user: Identity = Depends(get_current_user)):
    return CompanyResponse(company=serialize_doc(CompanyService().get(company_id)))
