"""이미지 생성 프롬프트"""

LOCATION_PROMPT_TEMPLATE = (
    "Create an image of {location} with this person there. "
    "Use ONLY the person from the uploaded image - ignore all background, objects, "
    "and scenery from the original photo. "
    "Use good lighting and natural pose that fits the location. "
    "The person should look natural and well-integrated into the environment."
)
