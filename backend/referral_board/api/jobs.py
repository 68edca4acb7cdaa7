from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from referral_board.auth import Principal, get_current_user
from referral_board.database import get_db
from referral_board.schemas import JobCreate, JobUpdate, JobResponse, MessageResponse
from referral_board.services.jobs import JobCatalog

router = APIRouter()


@router.get("", response_model=list[JobResponse])
async def list_jobs(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_user),
):
    jobs = await JobCatalog(db).list_all()
    return [JobResponse.model_validate(job) for job in jobs]


@router.get("/user", response_model=list[JobResponse])
async def list_my_jobs(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_user),
):
    jobs = await JobCatalog(db).list_for_user(principal)
    return [JobResponse.model_validate(job) for job in jobs]


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: str,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_user),
):
    job = await JobCatalog(db).get(principal, job_id)
    return JobResponse.model_validate(job)


@router.post("", response_model=JobResponse)
async def create_job(
    data: JobCreate,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_user),
):
    job = await JobCatalog(db).create(principal, data)
    return JobResponse.model_validate(job)


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: str,
    update: JobUpdate,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_user),
):
    job = await JobCatalog(db).update(principal, job_id, update)
    return JobResponse.model_validate(job)


@router.delete("/{job_id}", response_model=MessageResponse)
async def delete_job(
    job_id: str,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_user),
):
    await JobCatalog(db).delete(principal, job_id)
    return MessageResponse(msg="Job removed")
