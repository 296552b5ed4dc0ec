# Demonstration notes served by /api/examples; the eval cases keep their own copies.
EXAMPLE_TEXTS = {
    "pathology": (
        "A 58-year-old female presents with a 2.3 cm invasive ductal carcinoma in the upper outer "
        "quadrant of the left breast. Pathology reveals ER-positive, PR-positive, and HER2-negative "
        "status. The tumor is grade 2 with no lymphovascular invasion. Sentinel lymph node biopsy "
        "shows 0/3 nodes positive. Final staging is T2N0M0, Stage IIA. Treatment plan includes "
        "lumpectomy followed by adjuvant chemotherapy and radiation therapy."
    ),
    "clinical": (
        "Patient is a 45-year-old female diagnosed with triple-negative breast cancer. Initial "
        "presentation showed a 3.5 cm mass detected on mammography. Biopsy confirmed infiltrating "
        "ductal carcinoma, grade 3. Staging workup revealed T2N1M0, Stage IIB disease. The patient "
        "underwent neoadjuvant chemotherapy with doxorubicin and paclitaxel, followed by mastectomy. "
        "Pathological complete response was achieved."
    ),
    "followup": (
        "62-year-old female with history of Stage IIIA breast cancer (T3N2M0), ER-positive, "
        "PR-positive, HER2-positive. Previously treated with mastectomy, adjuvant chemotherapy, "
        "trastuzumab, and radiation therapy. Currently on anastrozole for hormonal therapy. "
        "Follow-up mammography and clinical examination show no evidence of recurrence at "
        "24 months post-treatment."
    ),
}
