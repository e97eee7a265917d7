"""
Logique métier du dashboard

- property_code : génération des codes propriété
- property_filters : filtres en mémoire
- suggestions : autosuggestion de la recherche
- share_text : textes de partage WhatsApp / presse-papier
- authorization : droits admin / agent
- property_service, property_intake : services propriétés et webhook
- stats, storage : tableau de bord et images
"""
