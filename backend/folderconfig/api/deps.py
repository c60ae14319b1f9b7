from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from folderconfig.db.mongodb import get_database
from folderconfig.services.directory import DirectoryService


async def get_directory_service(
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> DirectoryService:
    return DirectoryService(db)
