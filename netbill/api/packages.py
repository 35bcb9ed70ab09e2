from fastapi import APIRouter, Depends, HTTPException
from typing import List
import logging
from netbill.db.session import Database, get_db
from netbill.schemas.package import Package, PackageCreate, PackageUpdate

router = APIRouter(prefix="/packages", tags=["packages"])
logger = logging.getLogger(__name__)

@router.get("", response_model=List[Package])
async def list_packages(db: Database = Depends(get_db)):
    return await db.packages.list_all()

@router.get("/{package_id}", response_model=Package)
async def get_package(package_id: str, db: Database = Depends(get_db)):
    package = await db.packages.find_by_id(package_id)
    if not package:
        raise HTTPException(status_code=404, detail="Package not found")
    return package

@router.post("", response_model=Package, status_code=201)
async def create_package(payload: PackageCreate, db: Database = Depends(get_db)):
    return await db.packages.create(payload.model_dump(exclude_none=True))

@router.put("/{package_id}", response_model=Package)
async def update_package(package_id: str, payload: PackageUpdate, db: Database = Depends(get_db)):
    return await db.packages.update(package_id, payload.model_dump(exclude_none=True))

@router.delete("/{package_id}")
async def delete_package(package_id: str, db: Database = Depends(get_db)):
    """Hard delete. Refused while customers are still on the package."""
    subscribers = await db.customers.list_by_package(package_id)
    if subscribers:
        raise HTTPException(
            status_code=400,
            detail=f"Package is assigned to {len(subscribers)} customer(s)"
        )
    await db.packages.delete(package_id)
    return {"message": "Package deleted successfully"}
