from fastapi import APIRouter, Depends, File, Form, UploadFile
from app.core.dependencies import require_member
from app.core.pagination import Page
from app.core.validation import build_model, raise_for_errors
from app.database.supabase_client import get_supabase
from app.modules.cases.schemas import CaseCreate, CaseUpdate, CaseImages, CaseResponse
from app.modules.cases.service import CaseService
from app.modules.cases.validation import normalize_case_form, validate_case_form
from app.config import settings
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/cases", tags=["cases"])


def get_case_service(supabase: Client = Depends(get_supabase)) -> CaseService:
    return CaseService(supabase)


async def read_upload(file: Optional[UploadFile]) -> Optional[bytes]:
    """Bytes of an uploaded file, or None when the field was left empty."""
    if file is None or not file.filename:
        return None
    content = await file.read()
    return content or None


async def read_case_images(
    image: Optional[UploadFile],
    image_before: Optional[UploadFile],
    image_after: Optional[UploadFile],
) -> CaseImages:
    return CaseImages(
        image=await read_upload(image),
        image_before=await read_upload(image_before),
        image_after=await read_upload(image_after),
    )


@router.post("", response_model=CaseResponse, status_code=201)
async def create_case(
    company_name: str = Form(""),
    desc: str = Form(""),
    city: str = Form(""),
    country: str = Form(""),
    contact_person: str = Form(""),
    form_type: str = Form("normal"),
    image: Optional[UploadFile] = File(None),
    image_before: Optional[UploadFile] = File(None),
    image_after: Optional[UploadFile] = File(None),
    user_data: Dict = Depends(require_member),
    service: CaseService = Depends(get_case_service)
):
    """Create a case from the admin form (multipart, images optional)"""
    form = normalize_case_form({
        "company_name": company_name,
        "desc": desc,
        "city": city,
        "country": country,
        "contact_person": contact_person,
        "form_type": form_type,
    })
    raise_for_errors(validate_case_form(form))
    case_data = build_model(CaseCreate, form)
    images = await read_case_images(image, image_before, image_after)
    return service.create_case(case_data, user_data["id"], images)


@router.get("", response_model=Page[CaseResponse])
async def list_cases(
    page: int = 1,
    limit: int = settings.default_page_size,
    user_data: Dict = Depends(require_member),
    service: CaseService = Depends(get_case_service)
):
    """List cases newest first with the total count"""
    return service.list_cases(page=page, limit=limit)


@router.get("/{case_id}", response_model=CaseResponse)
async def get_case(
    case_id: int,
    user_data: Dict = Depends(require_member),
    service: CaseService = Depends(get_case_service)
):
    return service.get_case_by_id(case_id)


@router.put("/{case_id}", response_model=CaseResponse)
async def update_case(
    case_id: int,
    company_name: str = Form(""),
    desc: str = Form(""),
    city: str = Form(""),
    country: str = Form(""),
    contact_person: str = Form(""),
    form_type: str = Form("normal"),
    created_at: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    image_before: Optional[UploadFile] = File(None),
    image_after: Optional[UploadFile] = File(None),
    user_data: Dict = Depends(require_member),
    service: CaseService = Depends(get_case_service)
):
    """Update a case; stored images are kept unless a new file is sent"""
    form = normalize_case_form({
        "company_name": company_name,
        "desc": desc,
        "city": city,
        "country": country,
        "contact_person": contact_person,
        "form_type": form_type,
    })
    raise_for_errors(validate_case_form(form))
    form["created_at"] = created_at or None
    case_data = build_model(CaseUpdate, form)
    images = await read_case_images(image, image_before, image_after)
    return service.update_case(case_id, case_data, user_data["id"], images)


@router.delete("/{case_id}", status_code=204)
async def delete_case(
    case_id: int,
    user_data: Dict = Depends(require_member),
    service: CaseService = Depends(get_case_service)
):
    service.delete_case(case_id)
    return None
