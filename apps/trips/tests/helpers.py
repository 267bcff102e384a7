import io

from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image


def make_photo(name='passenger.jpg'):
    buffer = io.BytesIO()
    Image.new('RGB', (16, 16), color='red').save(buffer, format='JPEG')
    return SimpleUploadedFile(name, buffer.getvalue(), content_type='image/jpeg')
