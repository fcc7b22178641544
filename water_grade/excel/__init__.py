"""Spreadsheet side: grid reading, header resolution, record extraction, workbook output."""
