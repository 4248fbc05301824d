"""
Spreadsheet export of a finished event
"""

import io
import logging

import pandas as pd
from sqlalchemy.orm import Session

from eventboard.domain.errors import ExportNotAllowedError
from eventboard.models import Event
from eventboard.services.repositories import PostRepo

logger = logging.getLogger(__name__)

POST_COLUMNS = ['Category', 'Title', 'Author', 'Status', 'Submitted At', 'Interests']
INTEREST_COLUMNS = ['Post', 'Name', 'Email', 'Message', 'Declared At']


class ExportService:
    """Service for exporting posts and interests of closed events"""

    def __init__(self, db: Session):
        self.posts = PostRepo(db)

    def export_event(self, event: Event) -> bytes:
        """Build an xlsx workbook with a Posts and an Interests sheet"""
        if not event.allows_export():
            raise ExportNotAllowedError()

        post_rows = []
        interest_rows = []
        for post in self.posts.find_by_event(event):
            post_rows.append({
                'Category': post.category.name,
                'Title': post.title,
                # Authors who did not opt in stay anonymous in exports too
                'Author': post.display_author() or '',
                'Status': post.status.label,
                'Submitted At': post.created_at,
                'Interests': post.interest_count(),
            })
            for interest in post.interests:
                interest_rows.append({
                    'Post': post.title,
                    'Name': interest.name,
                    'Email': interest.email,
                    'Message': interest.message or '',
                    'Declared At': interest.created_at,
                })

        posts_df = pd.DataFrame(post_rows, columns=POST_COLUMNS)
        interests_df = pd.DataFrame(interest_rows, columns=INTEREST_COLUMNS)

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            posts_df.to_excel(writer, index=False, sheet_name='Posts')
            interests_df.to_excel(writer, index=False, sheet_name='Interests')

        logger.info("Exported %d posts and %d interests for event %s",
                    len(post_rows), len(interest_rows), event.slug)
        return buffer.getvalue()
