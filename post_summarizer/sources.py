"""Plain-text extraction for uploaded documents."""
import re


def extract_rtf_text(rtf_content: str) -> str:
    """Extract plain text from RTF content."""
    # Paragraph marks become blank lines so paragraph structure survives
    text = re.sub(r'\\par\b ?', '\n\n', rtf_content)
    # Remove RTF control words and groups
    text = re.sub(r'\\\*.*?;', '', text)
    text = re.sub(r'\\[a-z]+-?\d* ?', '', text)
    text = re.sub(r'[{}]', '', text)
    text = re.sub(r'\\[^a-z]', '', text)
    # Clean up extra whitespace
    text = re.sub(r'[ \t]+', ' ', text)
    text = re.sub(r'\n\s*\n', '\n\n', text)
    return text.strip()


def extract_markdown_text(md_content: str) -> str:
    """Extract plain text from Markdown content."""
    # Remove code blocks first so their contents are not treated as prose
    text = re.sub(r'```.*?```', '', md_content, flags=re.DOTALL)
    text = re.sub(r'`([^`]+)`', r'\1', text)
    # Remove headers
    text = re.sub(r'^#{1,6}\s+', '', text, flags=re.MULTILINE)
    # Remove bold and italic
    text = re.sub(r'\*{1,2}(.*?)\*{1,2}', r'\1', text)
    text = re.sub(r'_{1,2}(.*?)_{1,2}', r'\1', text)
    # Remove links
    text = re.sub(r'\[([^\]]+)\]\([^)]+\)', r'\1', text)
    # Remove horizontal rules
    text = re.sub(r'^-{3,}$', '', text, flags=re.MULTILINE)
    text = re.sub(r'\n\s*\n', '\n\n', text)
    return text.strip()


def generate_default_title(filename: str) -> str:
    """Generate default title from filename."""
    name = filename.rsplit('.', 1)[0]
    name = name.replace('_', ' ').replace('-', ' ')
    return ' '.join(word.capitalize() for word in name.split())


def load_text(filename: str, content) -> str:
    """Decode an uploaded file and return its plain text based on the extension."""
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    file_extension = filename.lower().rsplit('.', 1)[-1] if '.' in filename else ''
    if file_extension == 'rtf':
        return extract_rtf_text(content)
    elif file_extension == 'md':
        return extract_markdown_text(content)
    else:  # txt and other formats
        return content
