# carechat/topic_filter.py
"""
医疗话题过滤。

对固定关键词列表做不区分大小写的子串匹配，不分词：
"cancerous" 会命中 "cancer"；"mental health" 这类短语必须连续出现才算命中。
"""

# 全部小写保存，匹配时只需要把消息转小写
HEALTHCARE_KEYWORDS = (
    "health", "doctor", "hospital", "clinic", "medicine", "treatment",
    "symptom", "diagnosis", "prescription", "medication", "wellness",
    "fitness", "mental health", "anxiety", "depression", "stress", "sleep",
    "pain", "fever", "headache", "cold", "flu", "cough", "infection", "virus",
    "bacteria", "vaccine", "injury", "wound", "fracture", "sprain",
    "bleeding", "burn", "swelling", "nausea", "vomiting", "diarrhea",
    "constipation", "stomach ache", "indigestion", "ulcer", "heart",
    "cardiac", "blood pressure", "hypertension", "cholesterol", "diabetes",
    "insulin", "glucose", "liver", "kidney", "lung", "respiratory", "asthma",
    "bronchitis", "pneumonia", "arthritis", "joint pain", "muscle pain",
    "fatigue", "cancer", "tumor", "therapy", "chemo", "radiation", "surgery",
    "operation", "x-ray", "scan", "mri", "ct scan", "blood test", "allergy",
    "rash", "itching", "skin", "eczema", "psoriasis", "acne", "hair loss",
    "baldness", "eye", "vision", "glasses", "contact lenses", "ear",
    "hearing", "hearing aid", "toothache", "dentist", "dental", "period",
    "menstruation", "pregnancy", "fertility", "birth control", "abortion",
    "childbirth", "baby", "infant",
)


def is_healthcare_related(message: str | None) -> bool:
    if not message:
        return False
    text = message.lower()
    return any(keyword in text for keyword in HEALTHCARE_KEYWORDS)
